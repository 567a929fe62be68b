"""Beans of Atom 0.3 and 1.0 feeds.

Atom 0.3 names map onto their 1.0 successors: ``tagline`` is ``subtitle``,
``copyright`` is ``rights``, ``modified`` is ``updated`` and ``issued`` is
``published``.
"""

from datetime import datetime

from .bean import ObjectBean, list_property
from .modules import Module, lookup_module
from .wire_feed import WireFeed


class Link(ObjectBean):
    """Atom link; ``rel`` defaults to "alternate"."""

    PROPERTIES = ("href", "href_resolved", "rel", "type", "hreflang", "title", "length")

    def __init__(
        self,
        href: str | None = None,
        rel: str = "alternate",
        type: str | None = None,
        hreflang: str | None = None,
        title: str | None = None,
        length: int = 0,
    ):
        self.href = href
        self._href_resolved: str | None = None
        self.rel = rel
        self.type = type
        self.hreflang = hreflang
        self.title = title
        self.length = length

    @property
    def href_resolved(self) -> str | None:
        """Absolute href, falling back to ``href`` when nothing was resolved."""
        return self._href_resolved if self._href_resolved is not None else self.href

    @href_resolved.setter
    def href_resolved(self, value: str | None) -> None:
        self._href_resolved = value


class Content(ObjectBean):
    """Atom text or content construct."""

    PROPERTIES = ("type", "value", "src", "mode")

    TEXT = "text"
    HTML = "html"
    XHTML = "xhtml"

    # Atom 0.3 modes
    XML = "xml"
    ESCAPED = "escaped"
    BASE64 = "base64"

    def __init__(
        self,
        value: str | None = None,
        type: str | None = None,
        src: str | None = None,
        mode: str | None = None,
    ):
        self.value = value
        self.type = type
        self.src = src
        self.mode = mode


class Person(ObjectBean):
    PROPERTIES = ("name", "uri", "email")

    def __init__(
        self, name: str | None = None, uri: str | None = None, email: str | None = None
    ):
        self.name = name
        self.uri = uri
        self.email = email


class Category(ObjectBean):
    PROPERTIES = ("term", "scheme", "label")

    def __init__(
        self, term: str | None = None, scheme: str | None = None, label: str | None = None
    ):
        self.term = term
        self.scheme = scheme
        self.label = label


class Generator(ObjectBean):
    PROPERTIES = ("url", "version", "value")

    def __init__(
        self, value: str | None = None, url: str | None = None, version: str | None = None
    ):
        self.value = value
        self.url = url
        self.version = version


class Entry(ObjectBean):
    """Atom entry."""

    PROPERTIES = (
        "id",
        "title_ex",
        "alternate_links",
        "other_links",
        "authors",
        "contributors",
        "categories",
        "summary",
        "contents",
        "rights",
        "published",
        "updated",
        "created",
        "source",
        "modules",
    )

    alternate_links = list_property("alternate_links")
    other_links = list_property("other_links")
    authors = list_property("authors")
    contributors = list_property("contributors")
    categories = list_property("categories")
    contents = list_property("contents")
    sparse_properties = frozenset({"modules"})
    modules = list_property("modules")

    def __init__(self):
        self.id: str | None = None
        self.title_ex: Content | None = None
        self.summary: Content | None = None
        self.rights: str | None = None
        self.published: datetime | None = None
        self.updated: datetime | None = None
        self.created: datetime | None = None
        self.source: Feed | None = None

    @property
    def title(self) -> str | None:
        return self.title_ex.value if self.title_ex is not None else None

    @title.setter
    def title(self, value: str | None) -> None:
        if self.title_ex is None:
            self.title_ex = Content()
        self.title_ex.value = value

    def get_module(self, uri: str) -> Module | None:
        return lookup_module(self.modules, uri)


class Feed(WireFeed):
    """Atom feed."""

    PROPERTIES = (
        "id",
        "language",
        "title_ex",
        "subtitle",
        "alternate_links",
        "other_links",
        "authors",
        "contributors",
        "categories",
        "generator",
        "rights",
        "info",
        "icon",
        "logo",
        "updated",
        "entries",
    )

    alternate_links = list_property("alternate_links")
    other_links = list_property("other_links")
    authors = list_property("authors")
    contributors = list_property("contributors")
    categories = list_property("categories")
    entries = list_property("entries")

    def __init__(self, feed_type: str | None = None):
        super().__init__(feed_type)
        self.id: str | None = None
        self.language: str | None = None
        self.title_ex: Content | None = None
        self.subtitle: Content | None = None
        self.generator: Generator | None = None
        self.rights: str | None = None
        self.info: Content | None = None
        self.icon: str | None = None
        self.logo: str | None = None
        self.updated: datetime | None = None

    @property
    def title(self) -> str | None:
        return self.title_ex.value if self.title_ex is not None else None

    @title.setter
    def title(self, value: str | None) -> None:
        if self.title_ex is None:
            self.title_ex = Content()
        self.title_ex.value = value
