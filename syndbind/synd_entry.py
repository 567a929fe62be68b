"""Entry of the synd model."""

from datetime import datetime
from functools import cache
from typing import Any

from . import uri as uri_normalizer
from .bean import CopyFrom, CopyFromBean, CopyFromHelper, list_property
from .modules import (
    DC_URI,
    DCModule,
    DCModuleImpl,
    Module,
    SyModule,
    SyModuleImpl,
    get_module,
    lookup_module,
)
from .synd import (
    SyndCategory,
    SyndCategoryImpl,
    SyndContent,
    SyndContentImpl,
    SyndEnclosure,
    SyndEnclosureImpl,
    SyndLink,
    SyndLinkImpl,
    SyndPerson,
    SyndPersonImpl,
)


class SyndEntry(CopyFrom):
    """Dialect-agnostic feed entry."""

    PROPERTIES = (
        "uri",
        "title",
        "title_ex",
        "link",
        "links",
        "description",
        "contents",
        "enclosures",
        "published_date",
        "updated_date",
        "categories",
        "authors",
        "author",
        "contributors",
        "modules",
        "source",
    )


# Mapped onto the Dublin Core module; cloned with it rather than on their own
CONVENIENCE_PROPERTIES = frozenset({"published_date", "author"})


class SyndEntryImpl(CopyFromBean, SyndEntry):
    """Bean for entries of SyndFeedImpl feeds.

    ``published_date`` and ``author`` are convenience properties stored in the
    Dublin Core module, which every entry carries.
    """

    bean_interface = SyndEntry
    convenience_properties = CONVENIENCE_PROPERTIES
    sparse_properties = frozenset({"modules"})

    links = list_property("links")
    contents = list_property("contents")
    enclosures = list_property("enclosures")
    authors = list_property("authors")
    contributors = list_property("contributors")
    # Converters rely on categories never being None
    categories = list_property("categories")

    def __init__(self):
        self._uri: str | None = None
        self.link: str | None = None
        self.title_ex: SyndContent | None = None
        self.description: SyndContent | None = None
        self.updated_date: datetime | None = None
        self.source = None
        self._modules: list[Module] | None = None
        self._wire_entry: Any = None

    @property
    def uri(self) -> str | None:
        """Entry URI, normalized on assignment."""
        return self._uri

    @uri.setter
    def uri(self, value: str | None) -> None:
        self._uri = uri_normalizer.normalize(value)

    @property
    def title(self) -> str | None:
        if self.title_ex is not None:
            return self.title_ex.value
        return None

    @title.setter
    def title(self, value: str | None) -> None:
        if self.title_ex is None:
            self.title_ex = SyndContentImpl()
        self.title_ex.value = value

    @property
    def modules(self) -> list[Module]:
        """Entry modules; a Dublin Core module is always present."""
        if self._modules is None:
            self._modules = []
        if get_module(self._modules, DC_URI) is None:
            self._modules.append(DCModuleImpl())
        return self._modules

    @modules.setter
    def modules(self, value: list[Module] | None) -> None:
        self._modules = value

    def get_module(self, uri: str) -> Module | None:
        """Return the module for ``uri``, creating registered modules on demand."""
        return lookup_module(self.modules, uri)

    @property
    def _dc_module(self) -> DCModule:
        return self.get_module(DC_URI)

    @property
    def published_date(self) -> datetime | None:
        return self._dc_module.date

    @published_date.setter
    def published_date(self, value: datetime | None) -> None:
        self._dc_module.date = value

    @property
    def author(self) -> str:
        """First author's name, else the DC creator, else an empty string."""
        if self.authors:
            author = self.authors[0].name
        else:
            author = self._dc_module.creator
        return author if author is not None else ""

    @author.setter
    def author(self, value: str | None) -> None:
        # Only the first assignment reaches the DC creator
        dc_module = self._dc_module
        if not dc_module.creator:
            dc_module.creator = value

    @property
    def wire_entry(self) -> Any:
        """Original RSS item or Atom entry, when the wire feed was preserved."""
        return self._wire_entry

    @wire_entry.setter
    def wire_entry(self, value: Any) -> None:
        self._wire_entry = value

    def copy_from(self, source: Any) -> None:
        _copy_from_helper().copy(self, source)

    def find_related_link(self, relation: str) -> SyndLink | None:
        for link in self.links:
            if link.rel == relation:
                return link
        return None


@cache
def _copy_from_helper() -> CopyFromHelper:
    from .synd_feed import SyndFeed, SyndFeedImpl

    return CopyFromHelper(
        SyndEntry,
        {
            "uri": str,
            "title": str,
            "title_ex": SyndContent,
            "link": str,
            "links": SyndLink,
            "description": SyndContent,
            "contents": SyndContent,
            "enclosures": SyndEnclosure,
            "updated_date": datetime,
            "categories": SyndCategory,
            "authors": SyndPerson,
            "contributors": SyndPerson,
            "modules": Module,
            "source": SyndFeed,
        },
        {
            SyndContent: SyndContentImpl,
            SyndLink: SyndLinkImpl,
            SyndEnclosure: SyndEnclosureImpl,
            SyndCategory: SyndCategoryImpl,
            SyndPerson: SyndPersonImpl,
            SyndFeed: SyndFeedImpl,
            DCModule: DCModuleImpl,
            SyModule: SyModuleImpl,
        },
    )
