"""Feed output: wire feed and synd feed beans to XML documents."""

from abc import ABC, abstractmethod
from pathlib import Path

from bs4 import BeautifulSoup, Doctype, Tag

from . import atom, rss
from .config import Config, OutputConfig
from .date_parser import format_rfc822, format_w3c
from .exceptions import UnsupportedFeedTypeError
from .georss import GEORSS_URI, geometry_to_text
from .logging_config import create_execution_logger
from .modules import DC_URI, SY_URI, Module, module_is_empty
from .synd_feed import SyndFeed
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

RDF_URI = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RSS_090_URI = "http://my.netscape.com/rdf/simple/0.9/"
RSS_10_URI = "http://purl.org/rss/1.0/"
CONTENT_URI = "http://purl.org/rss/1.0/modules/content/"
ATOM_03_URI = "http://purl.org/atom/ns#"
ATOM_10_URI = "http://www.w3.org/2005/Atom"

MODULE_PREFIXES = {DC_URI: "dc", SY_URI: "sy", GEORSS_URI: "georss"}

# DC list properties and their element names
DC_ELEMENTS = (
    ("titles", "title"),
    ("creators", "creator"),
    ("subjects", "subject"),
    ("descriptions", "description"),
    ("publishers", "publisher"),
    ("contributors", "contributor"),
    ("dates", "date"),
    ("types", "type"),
    ("formats", "format"),
    ("identifiers", "identifier"),
    ("sources", "source"),
    ("languages", "language"),
    ("relations", "relation"),
    ("coverages", "coverage"),
    ("rights_list", "rights"),
)

NETSCAPE_DOCTYPE = (
    "rss",
    "-//Netscape Communications//DTD RSS 0.91//EN",
    "http://my.netscape.com/publish/formats/rss-0.91.dtd",
)


class FeedGenerator(ABC):
    """Builds the XML document of one feed type."""

    feed_type = ""

    def __init__(self):
        self.soup = BeautifulSoup("", "xml")

    @abstractmethod
    def generate(self, feed: WireFeed) -> BeautifulSoup:
        """Build the document of ``feed``."""

    def element(
        self, parent: Tag, name: str, text=None, attrs: dict | None = None
    ) -> Tag:
        tag = self.soup.new_tag(name, attrs={k: str(v) for k, v in (attrs or {}).items()})
        if text is not None:
            tag.string = str(text)
        parent.append(tag)
        return tag

    def optional(self, parent: Tag, name: str, value) -> None:
        """Add a text element only when ``value`` is set."""
        if value is not None and value != "":
            self.element(parent, name, value)

    def declare_module_namespaces(self, root: Tag, module_lists) -> None:
        used = {
            module.uri
            for modules in module_lists
            for module in modules
            if module.uri in MODULE_PREFIXES and not module_is_empty(module)
        }
        for uri, prefix in MODULE_PREFIXES.items():
            if uri in used:
                root[f"xmlns:{prefix}"] = uri

    def add_modules(self, parent: Tag, modules: list[Module]) -> None:
        for module in modules:
            if module_is_empty(module):
                continue
            if module.uri == DC_URI:
                self._add_dc(parent, module)
            elif module.uri == SY_URI:
                self._add_sy(parent, module)
            elif module.uri == GEORSS_URI:
                self._add_georss(parent, module)

    def _add_dc(self, parent: Tag, module) -> None:
        for list_name, element_name in DC_ELEMENTS:
            for value in getattr(module, list_name):
                if list_name == "dates":
                    value = format_w3c(value)
                elif list_name == "subjects":
                    value = value.value
                self.optional(parent, f"dc:{element_name}", value)

    def _add_sy(self, parent: Tag, module) -> None:
        self.optional(parent, "sy:updatePeriod", module.update_period)
        if module.update_frequency:
            self.element(parent, "sy:updateFrequency", module.update_frequency)
        self.optional(parent, "sy:updateBase", format_w3c(module.update_base))

    def _add_georss(self, parent: Tag, module) -> None:
        if module.geometry is None:
            return
        rendered = geometry_to_text(module.geometry)
        if rendered is not None:
            name, text = rendered
            self.element(parent, f"georss:{name}", text)


class RSS090Generator(FeedGenerator):
    feed_type = RSS_090
    default_namespace = RSS_090_URI

    def generate(self, feed: rss.Channel) -> BeautifulSoup:
        root = self.element(
            self.soup, "rdf:RDF", attrs={"xmlns:rdf": RDF_URI, "xmlns": self.default_namespace}
        )
        self.declare_module_namespaces(
            root, [feed.modules] + [item.modules for item in feed.items]
        )
        self.root = root
        channel = self.element(root, "channel")
        self.populate_channel(channel, feed)
        if feed.image is not None:
            self.populate_image(self.element(root, "image"), feed.image)
        for item in feed.items:
            self.populate_item(self.element(root, "item"), item)
        if feed.text_input is not None:
            self.populate_text_input(self.element(root, "textinput"), feed.text_input)
        return self.soup

    def populate_channel(self, channel: Tag, feed: rss.Channel) -> None:
        self.optional(channel, "title", feed.title)
        self.optional(channel, "link", feed.link)
        self.optional(channel, "description", feed.description)
        self.add_modules(channel, feed.modules)

    def populate_image(self, tag: Tag, image: rss.Image) -> None:
        self.optional(tag, "title", image.title)
        self.optional(tag, "url", image.url)
        self.optional(tag, "link", image.link)

    def populate_text_input(self, tag: Tag, text_input: rss.TextInput) -> None:
        self.optional(tag, "title", text_input.title)
        self.optional(tag, "description", text_input.description)
        self.optional(tag, "name", text_input.name)
        self.optional(tag, "link", text_input.link)

    def populate_item(self, tag: Tag, item: rss.Item) -> None:
        self.optional(tag, "title", item.title)
        self.optional(tag, "link", item.link)
        self.add_modules(tag, item.modules)


class RSS10Generator(RSS090Generator):
    feed_type = RSS_10
    default_namespace = RSS_10_URI

    def generate(self, feed: rss.Channel) -> BeautifulSoup:
        soup = super().generate(feed)
        if any(item.content is not None for item in feed.items):
            self.root["xmlns:content"] = CONTENT_URI
        return soup

    def populate_channel(self, channel: Tag, feed: rss.Channel) -> None:
        if feed.uri:
            channel["rdf:about"] = feed.uri
        self.optional(channel, "title", feed.title)
        self.optional(channel, "link", feed.link)
        self.optional(channel, "description", feed.description)
        if feed.image is not None and feed.image.url:
            self.element(channel, "image", attrs={"rdf:resource": feed.image.url})
        items = self.element(channel, "items")
        sequence = self.element(items, "rdf:Seq")
        for item in feed.items:
            if item.uri:
                self.element(sequence, "rdf:li", attrs={"rdf:resource": item.uri})
        self.add_modules(channel, feed.modules)

    def populate_image(self, tag: Tag, image: rss.Image) -> None:
        if image.url:
            tag["rdf:about"] = image.url
        super().populate_image(tag, image)

    def populate_item(self, tag: Tag, item: rss.Item) -> None:
        if item.uri:
            tag["rdf:about"] = item.uri
        self.optional(tag, "title", item.title)
        self.optional(tag, "link", item.link)
        if item.description is not None:
            self.optional(tag, "description", item.description.value)
        if item.content is not None:
            self.optional(tag, "content:encoded", item.content.value)
        self.add_modules(tag, item.modules)


# RSS feed types written as <rss version="...">, oldest first
RSS_VERSIONS = {
    RSS_091_NETSCAPE: "0.91",
    RSS_091_USERLAND: "0.91",
    RSS_092: "0.92",
    RSS_093: "0.93",
    RSS_094: "0.94",
    RSS_20: "2.0",
}
RSS_LEVELS = [RSS_091_USERLAND, RSS_092, RSS_093, RSS_094, RSS_20]


class RSSGenerator(FeedGenerator):
    """Generator of the <rss> dialects, from 0.91 to 2.0."""

    def __init__(self, feed_type: str):
        super().__init__()
        self.feed_type = feed_type
        level_type = RSS_091_USERLAND if feed_type == RSS_091_NETSCAPE else feed_type
        self.level = RSS_LEVELS.index(level_type)

    def at_least(self, feed_type: str) -> bool:
        return self.level >= RSS_LEVELS.index(feed_type)

    def generate(self, feed: rss.Channel) -> BeautifulSoup:
        if self.feed_type == RSS_091_NETSCAPE:
            self.soup.append(Doctype.for_name_and_ids(*NETSCAPE_DOCTYPE))
        root = self.element(self.soup, "rss", attrs={"version": RSS_VERSIONS[self.feed_type]})
        self.declare_module_namespaces(
            root, [feed.modules] + [item.modules for item in feed.items]
        )
        if any(item.content is not None for item in feed.items) and self.at_least(RSS_092):
            root["xmlns:content"] = CONTENT_URI

        channel = self.element(root, "channel")
        self.populate_channel(channel, feed)
        for item in feed.items:
            self.populate_item(self.element(channel, "item"), item)
        return self.soup

    def populate_channel(self, channel: Tag, feed: rss.Channel) -> None:
        self.optional(channel, "title", feed.title)
        self.optional(channel, "link", feed.link)
        self.optional(channel, "description", feed.description)
        self.optional(channel, "language", feed.language)
        self.optional(channel, "rating", feed.rating)
        self.optional(channel, "copyright", feed.copyright)
        self.optional(channel, "pubDate", format_rfc822(feed.pub_date))
        self.optional(channel, "lastBuildDate", format_rfc822(feed.last_build_date))
        self.optional(channel, "docs", feed.docs)
        self.optional(channel, "managingEditor", feed.managing_editor)
        self.optional(channel, "webMaster", feed.web_master)

        if feed.image is not None:
            image = self.element(channel, "image")
            self.optional(image, "title", feed.image.title)
            self.optional(image, "url", feed.image.url)
            self.optional(image, "link", feed.image.link)
            self.optional(image, "width", feed.image.width)
            self.optional(image, "height", feed.image.height)
            self.optional(image, "description", feed.image.description)

        if feed.text_input is not None:
            text_input = self.element(channel, "textInput")
            self.optional(text_input, "title", feed.text_input.title)
            self.optional(text_input, "description", feed.text_input.description)
            self.optional(text_input, "name", feed.text_input.name)
            self.optional(text_input, "link", feed.text_input.link)

        if feed.skip_hours:
            skip_hours = self.element(channel, "skipHours")
            for hour in feed.skip_hours:
                self.element(skip_hours, "hour", hour)
        if feed.skip_days:
            skip_days = self.element(channel, "skipDays")
            for day in feed.skip_days:
                self.element(skip_days, "day", day)

        if self.at_least(RSS_092):
            for category in feed.categories:
                self.category(channel, category)
            if feed.cloud is not None:
                self.element(
                    channel,
                    "cloud",
                    attrs={
                        "domain": feed.cloud.domain or "",
                        "port": feed.cloud.port,
                        "path": feed.cloud.path or "",
                        "registerProcedure": feed.cloud.register_procedure or "",
                        "protocol": feed.cloud.protocol or "",
                    },
                )
        if self.at_least(RSS_094):
            self.optional(channel, "generator", feed.generator)
            if feed.ttl:
                self.element(channel, "ttl", feed.ttl)

        self.add_modules(channel, feed.modules)

    def category(self, parent: Tag, category: rss.Category) -> None:
        attrs = {"domain": category.domain} if category.domain else None
        self.element(parent, "category", category.value, attrs)

    def populate_item(self, tag: Tag, item: rss.Item) -> None:
        self.optional(tag, "title", item.title)
        self.optional(tag, "link", item.link)
        if item.description is not None:
            self.optional(tag, "description", item.description.value)

        if self.at_least(RSS_092):
            if item.source is not None:
                attrs = {"url": item.source.url} if item.source.url else None
                self.element(tag, "source", item.source.value or "", attrs)
            for enclosure in item.enclosures:
                attrs = {"url": enclosure.url or "", "length": enclosure.length}
                if enclosure.type:
                    attrs["type"] = enclosure.type
                self.element(tag, "enclosure", attrs=attrs)
            for category in item.categories:
                self.category(tag, category)
            if item.content is not None:
                self.optional(tag, "content:encoded", item.content.value)

        if self.at_least(RSS_093):
            self.optional(tag, "pubDate", format_rfc822(item.pub_date))
            self.optional(tag, "expirationDate", format_rfc822(item.expiration_date))

        if self.at_least(RSS_094):
            if item.guid is not None and item.guid.value:
                self.element(
                    tag,
                    "guid",
                    item.guid.value,
                    {"isPermaLink": "true" if item.guid.permalink else "false"},
                )
            self.optional(tag, "comments", item.comments)
            self.optional(tag, "author", item.author)

        self.add_modules(tag, item.modules)


# MIME types of feedparser text constructs and their Atom 1.0 names;
# xhtml is written escaped, as html
ATOM_TEXT_TYPES = {
    "text/plain": "text",
    "text/html": "html",
    "application/xhtml+xml": "html",
    "xhtml": "html",
}


class Atom10Generator(FeedGenerator):
    feed_type = ATOM_10
    person_uri_element = "uri"

    def root_attrs(self) -> dict:
        return {"xmlns": ATOM_10_URI}

    def generate(self, feed: atom.Feed) -> BeautifulSoup:
        attrs = self.root_attrs()
        if feed.language:
            attrs["xml:lang"] = feed.language
        root = self.element(self.soup, "feed", attrs=attrs)
        self.declare_module_namespaces(
            root, [feed.modules] + [entry.modules for entry in feed.entries]
        )
        self.populate_feed_head(root, feed)
        self.add_modules(root, feed.modules)
        for entry in feed.entries:
            self.populate_entry(self.element(root, "entry"), entry)
        return self.soup

    def populate_feed_head(self, tag: Tag, feed: atom.Feed) -> None:
        self.text_construct(tag, "title", feed.title_ex)
        self.text_construct(tag, "subtitle", feed.subtitle)
        self.optional(tag, "id", feed.id)
        self.optional(tag, "updated", format_w3c(feed.updated))
        self.optional(tag, "rights", feed.rights)
        self.links(tag, feed.alternate_links + feed.other_links)
        self.persons(tag, "author", feed.authors)
        self.persons(tag, "contributor", feed.contributors)
        for category in feed.categories:
            self.category(tag, category)
        if feed.generator is not None:
            attrs = {}
            if feed.generator.url:
                attrs["uri"] = feed.generator.url
            if feed.generator.version:
                attrs["version"] = feed.generator.version
            self.element(tag, "generator", feed.generator.value or "", attrs)
        self.optional(tag, "icon", feed.icon)
        self.optional(tag, "logo", feed.logo)

    def populate_entry(self, tag: Tag, entry: atom.Entry) -> None:
        self.text_construct(tag, "title", entry.title_ex)
        self.optional(tag, "id", entry.id)
        self.optional(tag, "updated", format_w3c(entry.updated))
        self.optional(tag, "published", format_w3c(entry.published))
        self.optional(tag, "rights", entry.rights)
        self.links(tag, entry.alternate_links + entry.other_links)
        self.persons(tag, "author", entry.authors)
        self.persons(tag, "contributor", entry.contributors)
        for category in entry.categories:
            self.category(tag, category)
        self.text_construct(tag, "summary", entry.summary)
        for content in entry.contents:
            self.content(tag, content)
        if entry.source is not None:
            self.populate_feed_head(self.element(tag, "source"), entry.source)
        self.add_modules(tag, entry.modules)

    def text_construct(self, parent: Tag, name: str, content: atom.Content | None) -> None:
        if content is None or content.value is None:
            return
        attrs = {}
        if content.type:
            attrs["type"] = ATOM_TEXT_TYPES.get(content.type, content.type)
        self.element(parent, name, content.value, attrs)

    def content(self, parent: Tag, content: atom.Content) -> None:
        attrs = {}
        if content.type:
            attrs["type"] = ATOM_TEXT_TYPES.get(content.type, content.type)
        if content.src:
            attrs["src"] = content.src
        self.element(parent, "content", content.value, attrs)

    def links(self, parent: Tag, links: list[atom.Link]) -> None:
        for link in links:
            attrs = {"href": link.href or "", "rel": link.rel}
            if link.type:
                attrs["type"] = link.type
            if link.hreflang:
                attrs["hreflang"] = link.hreflang
            if link.title:
                attrs["title"] = link.title
            if link.length:
                attrs["length"] = link.length
            self.element(parent, "link", attrs=attrs)

    def persons(self, parent: Tag, name: str, persons: list[atom.Person]) -> None:
        for person in persons:
            tag = self.element(parent, name)
            self.optional(tag, "name", person.name)
            self.optional(tag, self.person_uri_element, person.uri)
            self.optional(tag, "email", person.email)

    def category(self, parent: Tag, category: atom.Category) -> None:
        attrs = {"term": category.term or ""}
        if category.scheme:
            attrs["scheme"] = category.scheme
        if category.label:
            attrs["label"] = category.label
        self.element(parent, "category", attrs=attrs)


class Atom03Generator(Atom10Generator):
    feed_type = ATOM_03
    person_uri_element = "url"

    def root_attrs(self) -> dict:
        return {"version": "0.3", "xmlns": ATOM_03_URI}

    def populate_feed_head(self, tag: Tag, feed: atom.Feed) -> None:
        self.text_construct(tag, "title", feed.title_ex)
        self.text_construct(tag, "tagline", feed.subtitle)
        self.optional(tag, "id", feed.id)
        self.optional(tag, "modified", format_w3c(feed.updated))
        self.optional(tag, "copyright", feed.rights)
        self.links(tag, feed.alternate_links + feed.other_links)
        self.persons(tag, "author", feed.authors)
        self.persons(tag, "contributor", feed.contributors)
        if feed.generator is not None:
            attrs = {}
            if feed.generator.url:
                attrs["url"] = feed.generator.url
            if feed.generator.version:
                attrs["version"] = feed.generator.version
            self.element(tag, "generator", feed.generator.value or "", attrs)
        self.text_construct(tag, "info", feed.info)

    def populate_entry(self, tag: Tag, entry: atom.Entry) -> None:
        self.text_construct(tag, "title", entry.title_ex)
        self.links(tag, entry.alternate_links + entry.other_links)
        self.persons(tag, "author", entry.authors)
        self.persons(tag, "contributor", entry.contributors)
        self.optional(tag, "id", entry.id)
        self.optional(tag, "modified", format_w3c(entry.updated))
        self.optional(tag, "issued", format_w3c(entry.published))
        self.optional(tag, "created", format_w3c(entry.created))
        self.text_construct(tag, "summary", entry.summary)
        for content in entry.contents:
            self.content(tag, content)
        self.add_modules(tag, entry.modules)

    def text_construct(self, parent: Tag, name: str, content: atom.Content | None) -> None:
        # Atom 0.3 keeps MIME types and escapes markup
        if content is None or content.value is None:
            return
        attrs = {"mode": content.mode or atom.Content.ESCAPED}
        if content.type:
            attrs["type"] = content.type
        self.element(parent, name, content.value, attrs)

    def content(self, parent: Tag, content: atom.Content) -> None:
        self.text_construct(parent, "content", content)


def create_generator(feed_type: str | None) -> FeedGenerator:
    """Create the generator of a feed type.

    Raises:
        UnsupportedFeedTypeError: If the feed type cannot be written
    """
    if feed_type == RSS_090:
        return RSS090Generator()
    if feed_type == RSS_10:
        return RSS10Generator()
    if feed_type in RSS_VERSIONS:
        return RSSGenerator(feed_type)
    if feed_type == ATOM_10:
        return Atom10Generator()
    if feed_type == ATOM_03:
        return Atom03Generator()
    raise UnsupportedFeedTypeError(f"Invalid feed type [{feed_type}]")


def _entries_count(feed: WireFeed) -> int:
    return len(getattr(feed, "items", None) or getattr(feed, "entries", None) or [])


class WireFeedOutput:
    """Writes wire feed beans as XML documents."""

    def __init__(self, config: Config | None = None, execution_id: str | None = None):
        """Initialize WireFeedOutput.

        Args:
            config: Configuration, used for pretty printing and encoding
            execution_id: Execution ID for logging context
        """
        self.config = config or Config()
        self.output_config: OutputConfig = self.config.get_output_config()
        self.logger = create_execution_logger("feed_output", execution_id)

    def output_soup(self, feed: WireFeed) -> BeautifulSoup:
        """Build the XML document of a wire feed.

        Raises:
            UnsupportedFeedTypeError: If the feed type cannot be written
        """
        soup = create_generator(feed.feed_type).generate(feed)
        self.logger.log_feed_processing(feed.feed_type, _entries_count(feed))
        return soup

    def output_string(self, feed: WireFeed, pretty: bool | None = None) -> str:
        """Write a wire feed to an XML string.

        Args:
            feed: RSS channel or Atom feed to write
            pretty: Indent the document, defaults to the configured value

        Returns:
            The XML document, with its XML declaration
        """
        soup = self.output_soup(feed)
        if pretty is None:
            pretty = self.output_config.pretty_print
        return soup.prettify() if pretty else str(soup)

    def output_file(
        self, feed: WireFeed, path: str | Path, pretty: bool | None = None
    ) -> None:
        """Write a wire feed to a file in the configured encoding."""
        soup = self.output_soup(feed)
        if pretty is None:
            pretty = self.output_config.pretty_print
        encoding = self.output_config.encoding
        data = soup.prettify(encoding) if pretty else soup.encode(encoding)
        Path(path).write_bytes(data)
        self.logger.info("Feed written", path=str(path), feed_type=feed.feed_type)


class SyndFeedOutput:
    """Writes synd feeds as XML documents of their (or a given) feed type."""

    def __init__(self, config: Config | None = None, execution_id: str | None = None):
        self.config = config or Config()
        self.wire_feed_output = WireFeedOutput(self.config, execution_id)
        self.logger = create_execution_logger("feed_output", execution_id)

    def create_wire_feed(self, feed: SyndFeed, feed_type: str | None = None) -> WireFeed:
        """Convert a synd feed for writing.

        The target type is ``feed_type``, else the feed's own type, else the
        configured default.
        """
        target_type = (
            feed_type
            or feed.feed_type
            or self.wire_feed_output.output_config.default_feed_type
        )
        wire_feed = feed.create_wire_feed(target_type)
        self.logger.log_conversion(feed.feed_type, target_type, len(feed.entries))
        return wire_feed

    def output_string(
        self, feed: SyndFeed, feed_type: str | None = None, pretty: bool | None = None
    ) -> str:
        return self.wire_feed_output.output_string(self.create_wire_feed(feed, feed_type), pretty)

    def output_file(
        self,
        feed: SyndFeed,
        path: str | Path,
        feed_type: str | None = None,
        pretty: bool | None = None,
    ) -> None:
        self.wire_feed_output.output_file(self.create_wire_feed(feed, feed_type), path, pretty)
