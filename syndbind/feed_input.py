"""Feed input: XML documents to wire feed and synd feed beans."""

from pathlib import Path
from typing import Any

import feedparser

from . import atom, rss
from .config import Config
from .date_parser import from_struct_time, parse_date
from .exceptions import ParsingFeedException, UnsupportedFeedTypeError
from .georss import GeoRSSModuleImpl, geometry_from_where
from .logging_config import create_execution_logger
from .modules import (
    UPDATE_PERIODS,
    DCModuleImpl,
    DCSubjectImpl,
    SyModuleImpl,
    module_is_empty,
)
from .synd_feed import SyndFeed, SyndFeedImpl
from .wire_feed import (
    ATOM_03,
    ATOM_10,
    RSS_090,
    RSS_091_NETSCAPE,
    RSS_091_USERLAND,
    RSS_092,
    RSS_093,
    RSS_094,
    RSS_10,
    RSS_20,
    WireFeed,
)

# feedparser ``version`` values and the feed types they are read as
FEEDPARSER_VERSIONS = {
    "rss090": RSS_090,
    "rss091n": RSS_091_NETSCAPE,
    "rss091u": RSS_091_USERLAND,
    "rss092": RSS_092,
    "rss093": RSS_093,
    "rss094": RSS_094,
    "rss10": RSS_10,
    "rss20": RSS_20,
    "atom03": ATOM_03,
    "atom10": ATOM_10,
}

# Link types feedparser assigns to Atom links without one, by rel
FEEDPARSER_LINK_TYPES = {"self": "application/atom+xml"}

# Dialects without native author, language, rights or category elements
DC_DIALECTS = (RSS_090, RSS_10)

# <rss> dialects with native item categories and item authors
ITEM_CATEGORY_DIALECTS = (RSS_092, RSS_093, RSS_094, RSS_20)
ITEM_AUTHOR_DIALECTS = (RSS_094, RSS_20)


def _int(value: Any, default: int | None = None) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _updated(data: dict):
    # Checked with "in": older feedparser releases fall back to "published"
    # when "updated" is read with get()
    if "updated_parsed" in data:
        return from_struct_time(data["updated_parsed"])
    return None


def _names(data: dict, key: str) -> list[str]:
    return [p["name"] for p in data.get(key, []) if p.get("name")]


def _dc_module(data: dict) -> DCModuleImpl:
    """Collect the Dublin Core values feedparser folded into ``data``."""
    module = DCModuleImpl()
    module.creators = _names(data, "authors") or (
        [data["author"]] if data.get("author") else []
    )
    module.contributors = _names(data, "contributors")
    module.subjects = [
        DCSubjectImpl(tag.get("term"), tag.get("scheme"))
        for tag in data.get("tags", [])
        if tag.get("term")
    ]
    if data.get("rights"):
        module.rights = data["rights"]
    if data.get("language"):
        module.language = data["language"]
    if data.get("publisher"):
        module.publisher = data["publisher"]
    module.date = _updated(data)
    return module


def _georss_module(data: dict) -> GeoRSSModuleImpl | None:
    geometry = geometry_from_where(data.get("where"))
    return GeoRSSModuleImpl(geometry) if geometry is not None else None


class WireFeedInput:
    """Parses feed documents of any supported dialect into wire feed beans."""

    def __init__(self, config: Config | None = None, execution_id: str | None = None):
        """Initialize WireFeedInput.

        Args:
            config: Configuration, used for the enabled feed types
            execution_id: Execution ID for logging context
        """
        self.config = config or Config()
        self.logger = create_execution_logger("feed_input", execution_id)

    @property
    def supported_feed_types(self) -> list[str]:
        return self.config.get_feed_types()

    def build(self, source: str | bytes) -> WireFeed:
        """Parse a feed document.

        Args:
            source: XML document text or bytes

        Returns:
            An ``rss.Channel`` or ``atom.Feed`` carrying the detected feed type

        Raises:
            ParsingFeedException: If the document is not a feed at all
            UnsupportedFeedTypeError: If the dialect is unknown or disabled
        """
        data = source.encode("utf-8") if isinstance(source, str) else source
        result = feedparser.parse(data)

        version = result.get("version", "")
        if result.bozo and hasattr(result, "bozo_exception"):
            if not version:
                error = result.bozo_exception
                line_number = getattr(error, "getLineNumber", None)
                column_number = getattr(error, "getColumnNumber", None)
                self.logger.error(f"Invalid feed document: {error}", error=str(error))
                raise ParsingFeedException(
                    f"Invalid feed document: {error}",
                    line_number=line_number() if callable(line_number) else None,
                    column_number=column_number() if callable(column_number) else None,
                ) from error
            self.logger.warning(
                f"Feed parsing warning: {result.bozo_exception}",
                bozo_exception=str(result.bozo_exception),
            )

        feed_type = FEEDPARSER_VERSIONS.get(version)
        if feed_type is None:
            raise UnsupportedFeedTypeError(f"Unknown feed type [{version or 'none'}]")
        if feed_type not in self.supported_feed_types:
            raise UnsupportedFeedTypeError(f"Feed type [{feed_type}] is disabled")

        if feed_type in (ATOM_03, ATOM_10):
            feed = self._build_atom_feed(result.feed, result.entries, feed_type)
        else:
            feed = self._build_channel(result.feed, result.entries, feed_type)
        feed.encoding = result.get("encoding")

        self.logger.log_feed_processing(feed_type, len(result.entries))
        return feed

    def build_file(self, path: str | Path) -> WireFeed:
        """Parse a feed document read from a file."""
        return self.build(Path(path).read_bytes())

    def _sy_module(self, data: dict) -> SyModuleImpl | None:
        if not any(key.startswith("sy_") for key in data):
            return None
        module = SyModuleImpl()
        period = (data.get("sy_updateperiod") or "").strip().lower()
        if period in UPDATE_PERIODS:
            module.update_period = period
        elif period:
            self.logger.warning(
                f"Ignoring unknown update period: {period}", update_period=period
            )
        module.update_frequency = _int(data.get("sy_updatefrequency"), 0)
        module.update_base = parse_date(data.get("sy_updatebase"))
        return module

    def _build_channel(self, data: dict, entries: list, feed_type: str) -> rss.Channel:
        channel = rss.Channel(feed_type)
        channel.title = data.get("title")
        channel.link = data.get("link")
        channel.description = data.get("subtitle") or data.get("description")
        channel.uri = data.get("id")

        image = data.get("image")
        if image:
            channel.image = rss.Image()
            channel.image.title = image.get("title")
            channel.image.url = image.get("href") or image.get("url")
            channel.image.link = image.get("link")
            channel.image.width = _int(image.get("width"))
            channel.image.height = _int(image.get("height"))
            channel.image.description = image.get("description")

        text_input = data.get("textinput")
        if text_input:
            channel.text_input = rss.TextInput()
            channel.text_input.title = text_input.get("title")
            channel.text_input.description = text_input.get("description")
            channel.text_input.name = text_input.get("name")
            channel.text_input.link = text_input.get("link")

        dc_dialect = feed_type in DC_DIALECTS
        dc_module = _dc_module(data) if dc_dialect else DCModuleImpl()
        if not dc_dialect:
            channel.language = data.get("language")
            channel.copyright = data.get("rights")
            channel.managing_editor = data.get("author")
            channel.web_master = data.get("publisher")
            channel.docs = data.get("docs")
            channel.generator = data.get("generator")
            channel.ttl = _int(data.get("ttl"), 0)
            channel.pub_date = from_struct_time(data.get("published_parsed"))
            channel.last_build_date = _updated(data)
            channel.categories = [
                rss.Category(tag.get("term"), tag.get("scheme"))
                for tag in data.get("tags", [])
                if tag.get("term")
            ]
            cloud = data.get("cloud")
            if cloud:
                channel.cloud = rss.Cloud()
                channel.cloud.domain = cloud.get("domain")
                channel.cloud.port = _int(cloud.get("port"), 0)
                channel.cloud.path = cloud.get("path")
                channel.cloud.register_procedure = cloud.get("registerprocedure")
                channel.cloud.protocol = cloud.get("protocol")

        modules = [dc_module, self._sy_module(data), _georss_module(data)]
        channel.modules = [m for m in modules if m is not None and not module_is_empty(m)]
        channel.items = [self._build_item(entry, feed_type) for entry in entries]
        return channel

    def _build_item(self, data: dict, feed_type: str) -> rss.Item:
        dc_dialect = feed_type in DC_DIALECTS
        item = rss.Item()
        item.title = data.get("title")
        item.link = data.get("link")
        item.uri = data.get("id") if dc_dialect else None

        summary = data.get("summary_detail")
        if summary is not None:
            item.description = rss.Description(summary.get("value"), summary.get("type"))
        contents = data.get("content")
        if contents:
            item.content = rss.Content(contents[0].get("value"), contents[0].get("type"))

        if dc_dialect:
            dc_module = _dc_module(data)
        else:
            if data.get("id"):
                item.guid = rss.Guid(
                    data["id"],
                    permalink=bool(data.get("guidislink")) or data.get("link") == data["id"],
                )
            if feed_type in ITEM_AUTHOR_DIALECTS:
                item.author = data.get("author")
            item.comments = data.get("comments")
            item.pub_date = from_struct_time(data.get("published_parsed"))
            item.expiration_date = from_struct_time(data.get("expired_parsed"))
            if feed_type in ITEM_CATEGORY_DIALECTS:
                item.categories = [
                    rss.Category(tag.get("term"), tag.get("scheme"))
                    for tag in data.get("tags", [])
                    if tag.get("term")
                ]
            item.enclosures = [
                rss.Enclosure(e.get("href"), _int(e.get("length"), 0), e.get("type"))
                for e in data.get("enclosures", [])
            ]
            source = data.get("source")
            if source:
                item.source = rss.Source(source.get("href"), source.get("title"))
            # DC carries what the dialect has no item element for
            dc_module = _dc_module(data)
            if feed_type in ITEM_AUTHOR_DIALECTS:
                dc_module.creators = []
            if feed_type in ITEM_CATEGORY_DIALECTS:
                dc_module.subjects = []

        modules = [dc_module, _georss_module(data)]
        item.modules = [m for m in modules if m is not None and not module_is_empty(m)]
        return item

    def _build_atom_feed(self, data: dict, entries: list, feed_type: str) -> atom.Feed:
        feed = atom.Feed(feed_type)
        self._copy_atom_head(data, feed)
        feed.language = data.get("language")
        feed.subtitle = self._atom_content(data.get("subtitle_detail"))
        feed.info = self._atom_content(data.get("info_detail"))
        generator = data.get("generator_detail")
        if generator:
            feed.generator = atom.Generator(
                generator.get("name") or data.get("generator"),
                generator.get("href"),
                generator.get("version"),
            )
        feed.icon = data.get("icon")
        feed.logo = data.get("logo") or (data.get("image") or {}).get("href")
        feed.modules = [m for m in (self._sy_module(data), _georss_module(data)) if m is not None]
        feed.entries = [self._build_atom_entry(entry, feed_type) for entry in entries]
        return feed

    def _build_atom_entry(self, data: dict, feed_type: str) -> atom.Entry:
        entry = atom.Entry()
        self._copy_atom_head(data, entry)
        entry.summary = self._atom_content(data.get("summary_detail"))
        entry.contents = [self._atom_content(c) for c in data.get("content", [])]
        entry.published = from_struct_time(data.get("published_parsed"))
        entry.created = from_struct_time(data.get("created_parsed"))
        source = data.get("source")
        if source:
            entry.source = atom.Feed(feed_type)
            self._copy_atom_head(source, entry.source)
        entry.modules = [m for m in (_georss_module(data),) if m is not None]
        return entry

    def _copy_atom_head(self, data: dict, target) -> None:
        """Copy what Atom feeds, entries and entry sources have in common."""
        target.id = data.get("id")
        target.title_ex = self._atom_content(data.get("title_detail"))
        target.rights = data.get("rights")
        target.updated = _updated(data)
        links = [self._atom_link(link) for link in data.get("links", [])]
        target.alternate_links = [link for link in links if link.rel == "alternate"]
        target.other_links = [link for link in links if link.rel != "alternate"]
        target.authors = [self._atom_person(p) for p in data.get("authors", []) if p]
        target.contributors = [self._atom_person(p) for p in data.get("contributors", [])]
        target.categories = [
            atom.Category(tag.get("term"), tag.get("scheme"), tag.get("label"))
            for tag in data.get("tags", [])
        ]

    def _atom_content(self, detail: dict | None) -> atom.Content | None:
        if detail is None:
            return None
        return atom.Content(detail.get("value"), type=detail.get("type"), src=detail.get("src"))

    def _atom_link(self, link: dict) -> atom.Link:
        rel = link.get("rel", "alternate")
        link_type = link.get("type")
        # feedparser fills in a type for links that have none
        if link_type == FEEDPARSER_LINK_TYPES.get(rel, "text/html"):
            link_type = None
        return atom.Link(
            href=link.get("href"),
            rel=rel,
            type=link_type,
            hreflang=link.get("hreflang"),
            title=link.get("title"),
            length=_int(link.get("length"), 0),
        )

    def _atom_person(self, person: dict) -> atom.Person:
        return atom.Person(person.get("name"), person.get("href"), person.get("email"))


class SyndFeedInput:
    """Parses feed documents of any supported dialect into synd feeds."""

    def __init__(self, config: Config | None = None, execution_id: str | None = None):
        self.config = config or Config()
        self.wire_feed_input = WireFeedInput(self.config, execution_id)

    def build(self, source: str | bytes) -> SyndFeed:
        """Parse a feed document into a synd feed.

        Raises:
            ParsingFeedException: If the document is not a feed at all
            UnsupportedFeedTypeError: If the dialect is unknown or disabled
        """
        wire_feed = self.wire_feed_input.build(source)
        preserve = self.config.get_input_config().preserve_wire_feed
        return SyndFeedImpl(wire_feed, preserve_wire_feed=preserve)

    def build_file(self, path: str | Path) -> SyndFeed:
        """Parse a feed document read from a file into a synd feed."""
        return self.build(Path(path).read_bytes())
