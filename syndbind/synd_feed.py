"""Feed of the synd model."""

from collections.abc import MutableSequence, Sequence
from datetime import datetime
from typing import Iterable

from . import uri as uri_normalizer
from .bean import CopyFrom, CopyFromBean, CopyFromHelper, list_property
from .exceptions import UnsupportedFeedTypeError
from .modules import (
    DC_URI,
    DCModule,
    DCModuleImpl,
    DCSubject,
    DCSubjectImpl,
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
    SyndImage,
    SyndImageImpl,
    SyndLink,
    SyndLinkImpl,
    SyndPerson,
    SyndPersonImpl,
)
from .synd_entry import SyndEntry, SyndEntryImpl
from .wire_feed import WireFeed


class SyndFeed(CopyFrom):
    """Dialect-agnostic feed."""

    PROPERTIES = (
        "feed_type",
        "encoding",
        "uri",
        "title",
        "title_ex",
        "link",
        "links",
        "description",
        "description_ex",
        "image",
        "entries",
        "authors",
        "contributors",
        "modules",
        "docs",
        "generator",
        "managing_editor",
        "web_master",
        "published_date",
        "author",
        "copyright",
        "language",
        "categories",
    )


# Mapped onto the Dublin Core module; cloned with it rather than on their own
CONVENIENCE_PROPERTIES = frozenset(
    {"published_date", "author", "copyright", "language", "categories"}
)


def _as_subject(category: SyndCategory) -> DCSubject:
    if isinstance(category, SyndCategoryImpl):
        return category.subject
    return DCSubjectImpl(category.name, category.taxonomy_uri)


class SyndCategoryListFacade(MutableSequence):
    """Live list of categories over the subjects of a Dublin Core module."""

    def __init__(self, subjects: list[DCSubject]):
        self._subjects = subjects

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [SyndCategoryImpl(subject=s) for s in self._subjects[index]]
        return SyndCategoryImpl(subject=self._subjects[index])

    def __setitem__(self, index, category) -> None:
        if isinstance(index, slice):
            self._subjects[index] = [_as_subject(c) for c in category]
        else:
            self._subjects[index] = _as_subject(category)

    def __delitem__(self, index) -> None:
        del self._subjects[index]

    def __len__(self) -> int:
        return len(self._subjects)

    def insert(self, index: int, category: SyndCategory) -> None:
        self._subjects.insert(index, _as_subject(category))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sequence) or isinstance(other, str):
            return NotImplemented
        return list(self) == list(other)

    __hash__ = None

    def __repr__(self) -> str:
        return f"SyndCategoryListFacade({list(self)!r})"


class SyndFeedImpl(CopyFromBean, SyndFeed):
    """Bean for all types of feeds.

    It handles all RSS versions and Atom 0.3/1.0; it normalizes all the info
    of the wire feed into one shape. ``published_date``, ``author``,
    ``copyright``, ``language`` and ``categories`` are convenience properties
    stored in the Dublin Core module.
    """

    bean_interface = SyndFeed
    convenience_properties = CONVENIENCE_PROPERTIES
    sparse_properties = frozenset({"modules"})
    copy_from_helper = CopyFromHelper(
        SyndFeed,
        {
            "feed_type": str,
            "encoding": str,
            "uri": str,
            "title": str,
            "title_ex": SyndContent,
            "link": str,
            "links": SyndLink,
            "description": str,
            "description_ex": SyndContent,
            "image": SyndImage,
            "entries": SyndEntry,
            "authors": SyndPerson,
            "contributors": SyndPerson,
            "modules": Module,
            "docs": str,
            "generator": str,
            "managing_editor": str,
            "web_master": str,
        },
        {
            SyndContent: SyndContentImpl,
            SyndLink: SyndLinkImpl,
            SyndImage: SyndImageImpl,
            SyndEntry: SyndEntryImpl,
            SyndPerson: SyndPersonImpl,
            SyndCategory: SyndCategoryImpl,
            DCModule: DCModuleImpl,
            SyModule: SyModuleImpl,
        },
    )

    links = list_property("links")
    entries = list_property("entries")
    authors = list_property("authors")
    contributors = list_property("contributors")

    def __init__(self, feed: WireFeed | None = None, preserve_wire_feed: bool = False):
        """Create a synd feed, optionally converting a wire feed into it.

        Args:
            feed: RSS channel or Atom feed to copy from
            preserve_wire_feed: Keep ``feed`` (and its items/entries) reachable
                through ``wire_feed`` and each entry's ``wire_entry``

        Raises:
            UnsupportedFeedTypeError: If no converter handles ``feed.feed_type``
        """
        self.feed_type: str | None = None
        self.encoding: str | None = None
        self._uri: str | None = None
        self.title_ex: SyndContent | None = None
        self.description_ex: SyndContent | None = None
        self.link: str | None = None
        self.image: SyndImage | None = None
        self.docs: str | None = None
        self.generator: str | None = None
        self.managing_editor: str | None = None
        self.web_master: str | None = None
        self._modules: list[Module] | None = None
        self._wire_feed: WireFeed | None = None
        self.preserve_wire_feed = preserve_wire_feed

        if feed is not None:
            from .converters import get_converter

            self.feed_type = feed.feed_type
            get_converter(self.feed_type).copy_into(feed, self)
            if preserve_wire_feed:
                self._wire_feed = feed

    @property
    def supported_feed_types(self) -> list[str]:
        from .converters import CONVERTERS

        return list(CONVERTERS)

    @property
    def wire_feed(self) -> WireFeed | None:
        """Original wire feed, when it was preserved."""
        return self._wire_feed

    def create_wire_feed(self, feed_type: str | None = None) -> WireFeed:
        """Create a wire feed of the given type from this feed.

        Args:
            feed_type: Target feed type, defaults to this feed's ``feed_type``

        Raises:
            UnsupportedFeedTypeError: If no feed type is known or supported
        """
        from .converters import get_converter

        feed_type = feed_type or self.feed_type
        if feed_type is None:
            raise UnsupportedFeedTypeError("Feed type is not set")
        return get_converter(feed_type).create_real_feed(self)

    @property
    def uri(self) -> str | None:
        """Feed URI, normalized on assignment."""
        return self._uri

    @uri.setter
    def uri(self, value: str | None) -> None:
        self._uri = uri_normalizer.normalize(value)

    @property
    def title(self) -> str | None:
        return self.title_ex.value if self.title_ex is not None else None

    @title.setter
    def title(self, value: str | None) -> None:
        if self.title_ex is None:
            self.title_ex = SyndContentImpl()
        self.title_ex.value = value

    @property
    def description(self) -> str | None:
        return self.description_ex.value if self.description_ex is not None else None

    @description.setter
    def description(self, value: str | None) -> None:
        if self.description_ex is None:
            self.description_ex = SyndContentImpl()
        self.description_ex.value = value

    @property
    def modules(self) -> list[Module]:
        """Feed modules; a Dublin Core module is always present."""
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
    def author(self) -> str | None:
        return self._dc_module.creator

    @author.setter
    def author(self, value: str | None) -> None:
        self._dc_module.creator = value

    @property
    def copyright(self) -> str | None:
        return self._dc_module.rights

    @copyright.setter
    def copyright(self, value: str | None) -> None:
        self._dc_module.rights = value

    @property
    def language(self) -> str | None:
        return self._dc_module.language

    @language.setter
    def language(self, value: str | None) -> None:
        self._dc_module.language = value

    @property
    def categories(self) -> SyndCategoryListFacade:
        """Feed categories, a live view over the Dublin Core subjects."""
        return SyndCategoryListFacade(self._dc_module.subjects)

    @categories.setter
    def categories(self, value: Iterable[SyndCategory] | None) -> None:
        self._dc_module.subjects = [_as_subject(c) for c in value or ()]

