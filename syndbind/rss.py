"""Beans of RSS 0.90 to 2.0 feeds.

One set of beans covers every RSS version; a ``Channel`` records its version
in ``feed_type`` and versions simply leave unknown properties unset.
"""

from datetime import datetime

from .bean import ObjectBean, list_property
from .modules import Module, lookup_module
from .wire_feed import WireFeed

DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class Category(ObjectBean):
    PROPERTIES = ("domain", "value")

    def __init__(self, value: str | None = None, domain: str | None = None):
        self.value = value
        self.domain = domain


class Cloud(ObjectBean):
    """Web service notified when the channel changes."""

    PROPERTIES = ("domain", "port", "path", "register_procedure", "protocol")

    def __init__(self):
        self.domain: str | None = None
        self.port = 0
        self.path: str | None = None
        self.register_procedure: str | None = None
        self.protocol: str | None = None


class Content(ObjectBean):
    """Item content (content:encoded)."""

    PROPERTIES = ("type", "value")

    def __init__(self, value: str | None = None, type: str | None = None):
        self.value = value
        self.type = type


class Description(ObjectBean):
    PROPERTIES = ("type", "value")

    def __init__(self, value: str | None = None, type: str | None = None):
        self.value = value
        self.type = type


class Enclosure(ObjectBean):
    PROPERTIES = ("url", "length", "type")

    def __init__(self, url: str | None = None, length: int = 0, type: str | None = None):
        self.url = url
        self.length = length
        self.type = type


class Guid(ObjectBean):
    """Item identifier; a permalink unless stated otherwise."""

    PROPERTIES = ("permalink", "value")

    def __init__(self, value: str | None = None, permalink: bool = True):
        self.value = value
        self.permalink = permalink


class Image(ObjectBean):
    PROPERTIES = ("title", "url", "link", "width", "height", "description")

    def __init__(self):
        self.title: str | None = None
        self.url: str | None = None
        self.link: str | None = None
        self.width: int | None = None
        self.height: int | None = None
        self.description: str | None = None


class Source(ObjectBean):
    """Channel an item came from."""

    PROPERTIES = ("url", "value")

    def __init__(self, url: str | None = None, value: str | None = None):
        self.url = url
        self.value = value


class TextInput(ObjectBean):
    PROPERTIES = ("title", "description", "name", "link")

    def __init__(self):
        self.title: str | None = None
        self.description: str | None = None
        self.name: str | None = None
        self.link: str | None = None


class Item(ObjectBean):
    """RSS item."""

    PROPERTIES = (
        "title",
        "link",
        "uri",
        "description",
        "content",
        "source",
        "enclosures",
        "categories",
        "guid",
        "comments",
        "author",
        "pub_date",
        "expiration_date",
        "modules",
    )

    enclosures = list_property("enclosures")
    categories = list_property("categories")
    sparse_properties = frozenset({"modules"})
    modules = list_property("modules")

    def __init__(self):
        self.title: str | None = None
        self.link: str | None = None
        self.uri: str | None = None
        self.description: Description | None = None
        self.content: Content | None = None
        self.source: Source | None = None
        self.guid: Guid | None = None
        self.comments: str | None = None
        self.author: str | None = None
        self.pub_date: datetime | None = None
        self.expiration_date: datetime | None = None

    def get_module(self, uri: str) -> Module | None:
        return lookup_module(self.modules, uri)


class Channel(WireFeed):
    """RSS channel, the feed of every RSS version."""

    PROPERTIES = (
        "title",
        "description",
        "link",
        "uri",
        "image",
        "items",
        "text_input",
        "language",
        "rating",
        "copyright",
        "pub_date",
        "last_build_date",
        "docs",
        "managing_editor",
        "web_master",
        "skip_hours",
        "skip_days",
        "cloud",
        "categories",
        "generator",
        "ttl",
    )

    items = list_property("items")
    categories = list_property("categories")

    def __init__(self, feed_type: str | None = None):
        super().__init__(feed_type)
        self.title: str | None = None
        self.description: str | None = None
        self.link: str | None = None
        self.uri: str | None = None
        self.image: Image | None = None
        self.text_input: TextInput | None = None
        self.language: str | None = None
        self.rating: str | None = None
        self.copyright: str | None = None
        self.pub_date: datetime | None = None
        self.last_build_date: datetime | None = None
        self.docs: str | None = None
        self.managing_editor: str | None = None
        self.web_master: str | None = None
        self._skip_hours: list[int] = []
        self._skip_days: list[str] = []
        self.cloud: Cloud | None = None
        self.generator: str | None = None
        self.ttl = 0

    @property
    def skip_hours(self) -> list[int]:
        return self._skip_hours

    @skip_hours.setter
    def skip_hours(self, hours: list[int] | None) -> None:
        hours = list(hours or [])
        for hour in hours:
            if not 0 <= hour <= 23:
                raise ValueError(f"Invalid hour value {hour}, it must be between 0 and 23")
        self._skip_hours = hours

    @property
    def skip_days(self) -> list[str]:
        return self._skip_days

    @skip_days.setter
    def skip_days(self, days: list[str] | None) -> None:
        days = list(days or [])
        for day in days:
            if day not in DAYS:
                raise ValueError(f"Invalid day value {day!r}")
        self._skip_days = days
