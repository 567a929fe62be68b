"""Extension modules attached to feeds and entries.

A module is a namespaced bag of fields (Dublin Core, Syndication, GeoRSS...)
identified by its namespace URI. An owner holds at most one module per URI.
"""

from datetime import datetime

from .bean import CopyFrom, CopyFromBean, CopyFromHelper, first_item_property, list_property

DC_URI = "http://purl.org/dc/elements/1.1/"
SY_URI = "http://purl.org/rss/1.0/modules/syndication/"

# Module URI -> implementation class, used for lazy creation on lookup
MODULE_IMPLEMENTATIONS: dict[str, type] = {}


class Module(CopyFrom):
    """Extension data identified by a namespace URI."""

    URI = ""
    PROPERTIES = ()

    @property
    def uri(self) -> str:
        return self.URI


class ModuleImpl(CopyFromBean, Module):
    """Base class for module implementations."""


class DCSubject(CopyFrom):
    """Dublin Core subject: a value with an optional taxonomy URI."""

    PROPERTIES = ("taxonomy_uri", "value")


class DCSubjectImpl(CopyFromBean, DCSubject):
    bean_interface = DCSubject
    copy_from_helper = CopyFromHelper(
        DCSubject, {"taxonomy_uri": str, "value": str}, {}
    )

    def __init__(self, value: str | None = None, taxonomy_uri: str | None = None):
        self.value = value
        self.taxonomy_uri = taxonomy_uri


class DCModule(Module):
    """Dublin Core module.

    Every element is held as a list (``creators``, ``dates``...). The singular
    accessors (``creator``, ``date``...) read the first element and replace the
    whole list on assignment.
    """

    URI = DC_URI
    PROPERTIES = (
        "titles",
        "creators",
        "subjects",
        "descriptions",
        "publishers",
        "contributors",
        "dates",
        "types",
        "formats",
        "identifiers",
        "sources",
        "languages",
        "relations",
        "coverages",
        "rights_list",
        "title",
        "creator",
        "subject",
        "description",
        "publisher",
        "contributor",
        "date",
        "type",
        "format",
        "identifier",
        "source",
        "language",
        "relation",
        "coverage",
        "rights",
    )


DC_CONVENIENCE_PROPERTIES = frozenset(
    {
        "title",
        "creator",
        "subject",
        "description",
        "publisher",
        "contributor",
        "date",
        "type",
        "format",
        "identifier",
        "source",
        "language",
        "relation",
        "coverage",
        "rights",
    }
)


class DCModuleImpl(ModuleImpl, DCModule):
    bean_interface = DCModule
    convenience_properties = DC_CONVENIENCE_PROPERTIES
    copy_from_helper = CopyFromHelper(
        DCModule,
        {
            "titles": str,
            "creators": str,
            "subjects": DCSubject,
            "descriptions": str,
            "publishers": str,
            "contributors": str,
            "dates": datetime,
            "types": str,
            "formats": str,
            "identifiers": str,
            "sources": str,
            "languages": str,
            "relations": str,
            "coverages": str,
            "rights_list": str,
        },
        {DCSubject: DCSubjectImpl},
    )

    titles = list_property("titles")
    creators = list_property("creators")
    subjects = list_property("subjects")
    descriptions = list_property("descriptions")
    publishers = list_property("publishers")
    contributors = list_property("contributors")
    dates = list_property("dates")
    types = list_property("types")
    formats = list_property("formats")
    identifiers = list_property("identifiers")
    sources = list_property("sources")
    languages = list_property("languages")
    relations = list_property("relations")
    coverages = list_property("coverages")
    rights_list = list_property("rights_list")

    title = first_item_property("titles")
    creator = first_item_property("creators")
    subject = first_item_property("subjects")
    description = first_item_property("descriptions")
    publisher = first_item_property("publishers")
    contributor = first_item_property("contributors")
    date = first_item_property("dates")
    type = first_item_property("types")
    format = first_item_property("formats")
    identifier = first_item_property("identifiers")
    source = first_item_property("sources")
    language = first_item_property("languages")
    relation = first_item_property("relations")
    coverage = first_item_property("coverages")
    rights = first_item_property("rights_list")

    def is_empty(self) -> bool:
        return not any(
            getattr(self, name) for name in DCModule.PROPERTIES
            if name not in DC_CONVENIENCE_PROPERTIES
        )


UPDATE_PERIODS = ("hourly", "daily", "weekly", "monthly", "yearly")


class SyModule(Module):
    """Syndication module: how often a feed is updated."""

    URI = SY_URI
    PROPERTIES = ("update_period", "update_frequency", "update_base")


class SyModuleImpl(ModuleImpl, SyModule):
    bean_interface = SyModule
    copy_from_helper = CopyFromHelper(
        SyModule,
        {"update_period": str, "update_frequency": int, "update_base": datetime},
        {},
    )

    def __init__(self):
        self._update_period: str | None = None
        self.update_frequency = 0
        self.update_base: datetime | None = None

    @property
    def update_period(self) -> str | None:
        return self._update_period

    @update_period.setter
    def update_period(self, value: str | None) -> None:
        if value is not None and value not in UPDATE_PERIODS:
            raise ValueError(
                f"Invalid update period {value!r}, expected one of {UPDATE_PERIODS}"
            )
        self._update_period = value

    def is_empty(self) -> bool:
        return (
            self.update_period is None
            and not self.update_frequency
            and self.update_base is None
        )


def register_module(uri: str, implementation: type) -> None:
    """Register the implementation created when a module URI is looked up."""
    MODULE_IMPLEMENTATIONS[uri] = implementation


def create_module(uri: str) -> Module | None:
    """Instantiate the registered implementation for ``uri``, if any."""
    implementation = MODULE_IMPLEMENTATIONS.get(uri)
    return implementation() if implementation is not None else None


def get_module(modules: list[Module] | None, uri: str) -> Module | None:
    """Return the module with the given URI from a list, or None."""
    for module in modules or ():
        if module.uri == uri:
            return module
    return None


def lookup_module(modules: list[Module], uri: str) -> Module | None:
    """Return the module for ``uri``, creating and attaching a default one.

    Unregistered URIs with no attached module yield None.
    """
    module = get_module(modules, uri)
    if module is None:
        module = create_module(uri)
        if module is not None:
            modules.append(module)
    return module


def module_is_empty(module: Module) -> bool:
    """True for modules that report having no values; others count as set."""
    is_empty = getattr(module, "is_empty", None)
    return is_empty() if is_empty is not None else False


def clone_modules(modules: list[Module] | None) -> list[Module]:
    """Deep-clone a list of modules."""
    return [module.clone() for module in modules or ()]


register_module(DC_URI, DCModuleImpl)
register_module(SY_URI, SyModuleImpl)
