"""Converters between wire feeds (RSS channels, Atom feeds) and synd feeds.

There is one converter per feed type. Richer dialects extend the converter of
the dialect they grew from, so RSS 2.0 builds on 0.94, which builds on 0.93,
and so on down to RSS 0.90.

Values that the synd model keeps in the Dublin Core module (published date,
author, language, copyright, categories) are written to the dialect's native
elements when it has them; the matching DC values are then dropped from the
wire feed's module copy so they are not written twice.
"""

from abc import ABC, abstractmethod

from . import atom, rss
from .exceptions import UnsupportedFeedTypeError
from .modules import DC_URI, DCModule, clone_modules, get_module
from .synd import (
    SyndCategoryImpl,
    SyndContent,
    SyndContentImpl,
    SyndEnclosureImpl,
    SyndImageImpl,
    SyndLinkImpl,
    SyndPersonImpl,
)
from .synd_entry import SyndEntry, SyndEntryImpl
from .synd_feed import SyndFeed, SyndFeedImpl
from .uri import normalize
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

ENCLOSURE_REL = "enclosure"


def _drop_dc_values(modules: list, *list_names: str) -> None:
    """Empty the given lists of the Dublin Core module found in ``modules``."""
    dc_module: DCModule | None = get_module(modules, DC_URI)
    if dc_module is not None:
        for name in list_names:
            setattr(dc_module, name, [])


class Converter(ABC):
    """Converts one wire feed type to and from the synd model."""

    feed_type: str = ""

    @abstractmethod
    def copy_into(self, feed: WireFeed, synd_feed: SyndFeed) -> None:
        """Copy a wire feed of this converter's type into a synd feed."""

    @abstractmethod
    def create_real_feed(self, synd_feed: SyndFeed) -> WireFeed:
        """Create a wire feed of this converter's type from a synd feed."""


class RSS090Converter(Converter):
    feed_type = RSS_090

    def copy_into(self, feed: rss.Channel, synd_feed: SyndFeed) -> None:
        synd_feed.modules = clone_modules(feed.modules)
        synd_feed.encoding = feed.encoding
        if feed.uri:
            synd_feed.uri = feed.uri
        synd_feed.title = feed.title
        synd_feed.link = feed.link
        synd_feed.description = feed.description
        if feed.image is not None:
            synd_feed.image = self.create_synd_image(feed.image)
        preserve = getattr(synd_feed, "preserve_wire_feed", False)
        synd_feed.entries = [self.create_synd_entry(item, preserve) for item in feed.items]

    def create_synd_image(self, image: rss.Image) -> SyndImageImpl:
        return SyndImageImpl(
            title=image.title,
            url=image.url,
            link=image.link,
            width=image.width,
            height=image.height,
            description=image.description,
        )

    def create_synd_entry(self, item: rss.Item, preserve_wire_item: bool) -> SyndEntry:
        entry = SyndEntryImpl()
        if preserve_wire_item:
            entry.wire_entry = item
        entry.modules = clone_modules(item.modules)
        entry.uri = item.uri or item.link
        entry.title = item.title
        entry.link = item.link
        return entry

    def create_real_feed(self, synd_feed: SyndFeed) -> rss.Channel:
        channel = rss.Channel(self.feed_type)
        channel.modules = clone_modules(synd_feed.modules)
        channel.encoding = synd_feed.encoding
        channel.title = synd_feed.title
        channel.link = synd_feed.link
        channel.description = synd_feed.description
        if synd_feed.image is not None:
            channel.image = self.create_rss_image(synd_feed.image)
        channel.items = [self.create_rss_item(entry) for entry in synd_feed.entries]
        return channel

    def create_rss_image(self, synd_image) -> rss.Image:
        image = rss.Image()
        image.title = synd_image.title
        image.url = synd_image.url
        image.link = synd_image.link
        image.width = synd_image.width
        image.height = synd_image.height
        image.description = synd_image.description
        return image

    def create_rss_item(self, entry: SyndEntry) -> rss.Item:
        item = rss.Item()
        item.modules = clone_modules(entry.modules)
        item.title = entry.title
        item.link = entry.link
        item.uri = entry.uri
        self.copy_authors(entry, item)
        return item

    def copy_authors(self, entry: SyndEntry, item: rss.Item) -> None:
        """Write entry authors as DC creators, the only author element here."""
        dc_module: DCModule | None = get_module(item.modules, DC_URI)
        if dc_module is not None and not dc_module.creators:
            dc_module.creators = [p.name or p.email for p in entry.authors if p.name or p.email]


class RSS091UserlandConverter(RSS090Converter):
    feed_type = RSS_091_USERLAND

    def copy_into(self, feed: rss.Channel, synd_feed: SyndFeed) -> None:
        super().copy_into(feed, synd_feed)
        if feed.language:
            synd_feed.language = feed.language
        if feed.copyright:
            synd_feed.copyright = feed.copyright
        if feed.pub_date is not None:
            synd_feed.published_date = feed.pub_date
        synd_feed.docs = feed.docs
        synd_feed.managing_editor = feed.managing_editor
        synd_feed.web_master = feed.web_master

    def create_synd_entry(self, item: rss.Item, preserve_wire_item: bool) -> SyndEntry:
        entry = super().create_synd_entry(item, preserve_wire_item)
        if item.description is not None:
            entry.description = SyndContentImpl(
                item.description.value, type=item.description.type
            )
        return entry

    def create_real_feed(self, synd_feed: SyndFeed) -> rss.Channel:
        channel = super().create_real_feed(synd_feed)
        channel.language = synd_feed.language
        channel.copyright = synd_feed.copyright
        channel.pub_date = synd_feed.published_date
        channel.docs = synd_feed.docs
        channel.managing_editor = synd_feed.managing_editor
        channel.web_master = synd_feed.web_master
        _drop_dc_values(channel.modules, "languages", "rights_list", "dates")
        return channel

    def create_rss_item(self, entry: SyndEntry) -> rss.Item:
        item = super().create_rss_item(entry)
        if entry.description is not None:
            item.description = rss.Description(
                entry.description.value, type=entry.description.type
            )
        return item


class RSS091NetscapeConverter(RSS091UserlandConverter):
    feed_type = RSS_091_NETSCAPE


class RSS092Converter(RSS091UserlandConverter):
    feed_type = RSS_092

    def copy_into(self, feed: rss.Channel, synd_feed: SyndFeed) -> None:
        super().copy_into(feed, synd_feed)
        synd_feed.categories.extend(
            SyndCategoryImpl(category.value, category.domain)
            for category in feed.categories
        )

    def create_synd_entry(self, item: rss.Item, preserve_wire_item: bool) -> SyndEntry:
        entry = super().create_synd_entry(item, preserve_wire_item)
        entry.categories = [
            SyndCategoryImpl(category.value, category.domain) for category in item.categories
        ]
        entry.enclosures = [
            SyndEnclosureImpl(enclosure.url, enclosure.length, enclosure.type)
            for enclosure in item.enclosures
        ]
        if item.content is not None:
            entry.contents = [SyndContentImpl(item.content.value, type=item.content.type)]
        if item.source is not None:
            source = SyndFeedImpl()
            source.link = item.source.url
            source.title = item.source.value
            entry.source = source
        return entry

    def create_real_feed(self, synd_feed: SyndFeed) -> rss.Channel:
        channel = super().create_real_feed(synd_feed)
        channel.categories = [
            rss.Category(category.name, category.taxonomy_uri)
            for category in synd_feed.categories
        ]
        _drop_dc_values(channel.modules, "subjects")
        return channel

    def create_rss_item(self, entry: SyndEntry) -> rss.Item:
        item = super().create_rss_item(entry)
        item.categories = [
            rss.Category(category.name, category.taxonomy_uri) for category in entry.categories
        ]
        item.enclosures = [
            rss.Enclosure(enclosure.url, enclosure.length, enclosure.type)
            for enclosure in entry.enclosures
        ]
        if entry.contents:
            content = entry.contents[0]
            item.content = rss.Content(content.value, type=content.type)
        if entry.source is not None:
            item.source = rss.Source(entry.source.link, entry.source.title)
        return item


class RSS093Converter(RSS092Converter):
    feed_type = RSS_093

    def create_synd_entry(self, item: rss.Item, preserve_wire_item: bool) -> SyndEntry:
        entry = super().create_synd_entry(item, preserve_wire_item)
        # A DC date, when present, takes precedence over pubDate
        if item.pub_date is not None and entry.published_date is None:
            entry.published_date = item.pub_date
        return entry

    def create_rss_item(self, entry: SyndEntry) -> rss.Item:
        item = super().create_rss_item(entry)
        item.pub_date = entry.published_date
        _drop_dc_values(item.modules, "dates")
        return item


class RSS094Converter(RSS093Converter):
    feed_type = RSS_094

    def copy_into(self, feed: rss.Channel, synd_feed: SyndFeed) -> None:
        super().copy_into(feed, synd_feed)
        synd_feed.generator = feed.generator

    def create_synd_entry(self, item: rss.Item, preserve_wire_item: bool) -> SyndEntry:
        entry = super().create_synd_entry(item, preserve_wire_item)

        if item.guid is not None and item.guid.value:
            entry.uri = item.guid.value
            if item.link is None and item.guid.permalink:
                entry.link = item.guid.value
        else:
            entry.uri = item.link

        # The native author joins the DC creators
        if item.author:
            creators = entry.get_module(DC_URI).creators
            if item.author not in creators:
                creators.append(item.author)
        return entry

    def create_real_feed(self, synd_feed: SyndFeed) -> rss.Channel:
        channel = super().create_real_feed(synd_feed)
        channel.generator = synd_feed.generator
        return channel

    def create_rss_item(self, entry: SyndEntry) -> rss.Item:
        item = super().create_rss_item(entry)
        if entry.uri:
            # uri is normalized, link is not; a permalink guid keeps the link's spelling
            if entry.link and normalize(entry.link) == entry.uri:
                item.guid = rss.Guid(entry.link, permalink=True)
            else:
                item.guid = rss.Guid(entry.uri, permalink=False)
        return item

    def copy_authors(self, entry: SyndEntry, item: rss.Item) -> None:
        if entry.authors:
            person = entry.authors[0]
            item.author = person.email or person.name


class RSS20Converter(RSS094Converter):
    feed_type = RSS_20


class RSS10Converter(RSS090Converter):
    feed_type = RSS_10

    def create_synd_entry(self, item: rss.Item, preserve_wire_item: bool) -> SyndEntry:
        entry = super().create_synd_entry(item, preserve_wire_item)
        if item.description is not None:
            entry.description = SyndContentImpl(
                item.description.value, type=item.description.type
            )
        if item.content is not None:
            entry.contents = [SyndContentImpl(item.content.value, type=item.content.type)]
        return entry

    def create_real_feed(self, synd_feed: SyndFeed) -> rss.Channel:
        channel = super().create_real_feed(synd_feed)
        # rdf:about is mandatory on the channel
        channel.uri = synd_feed.uri or synd_feed.link
        return channel

    def create_rss_item(self, entry: SyndEntry) -> rss.Item:
        item = super().create_rss_item(entry)
        item.uri = entry.uri or entry.link
        if entry.description is not None:
            item.description = rss.Description(
                entry.description.value, type=entry.description.type
            )
        if entry.contents:
            content = entry.contents[0]
            item.content = rss.Content(content.value, type=content.type)
        return item


class Atom10Converter(Converter):
    feed_type = ATOM_10

    # Atom 0.3 has no category element, categories stay in DC subjects
    native_categories = True

    def copy_into(self, feed: atom.Feed, synd_feed: SyndFeed) -> None:
        synd_feed.modules = clone_modules(feed.modules)
        synd_feed.encoding = feed.encoding
        synd_feed.uri = feed.id
        synd_feed.title_ex = self.create_synd_content(feed.title_ex)
        synd_feed.description_ex = self.create_synd_content(feed.subtitle)

        synd_feed.links = [
            self.create_synd_link(link) for link in feed.alternate_links + feed.other_links
        ]
        if feed.alternate_links:
            synd_feed.link = feed.alternate_links[0].href_resolved

        synd_feed.authors = [self.create_synd_person(p) for p in feed.authors]
        synd_feed.contributors = [self.create_synd_person(p) for p in feed.contributors]
        if self.native_categories:
            synd_feed.categories.extend(self.create_synd_category(c) for c in feed.categories)

        if feed.rights:
            synd_feed.copyright = feed.rights
        if feed.language:
            synd_feed.language = feed.language
        if feed.updated is not None:
            synd_feed.published_date = feed.updated
        if feed.generator is not None:
            synd_feed.generator = feed.generator.value
        if feed.logo or feed.icon:
            synd_feed.image = SyndImageImpl(url=feed.logo or feed.icon)

        preserve = getattr(synd_feed, "preserve_wire_feed", False)
        synd_feed.entries = [self.create_synd_entry(e, preserve) for e in feed.entries]

    def create_synd_content(self, content: atom.Content | None) -> SyndContent | None:
        if content is None:
            return None
        return SyndContentImpl(content.value, type=content.type, mode=content.mode)

    def create_synd_link(self, link: atom.Link) -> SyndLinkImpl:
        return SyndLinkImpl(
            href=link.href_resolved,
            rel=link.rel,
            type=link.type,
            hreflang=link.hreflang,
            title=link.title,
            length=link.length,
        )

    def create_synd_person(self, person: atom.Person) -> SyndPersonImpl:
        return SyndPersonImpl(person.name, person.uri, person.email)

    def create_synd_category(self, category: atom.Category) -> SyndCategoryImpl:
        return SyndCategoryImpl(category.term, category.scheme)

    def create_synd_entry(self, entry: atom.Entry, preserve_wire_entry: bool) -> SyndEntry:
        synd_entry = SyndEntryImpl()
        if preserve_wire_entry:
            synd_entry.wire_entry = entry
        synd_entry.modules = clone_modules(entry.modules)
        synd_entry.uri = entry.id
        synd_entry.title_ex = self.create_synd_content(entry.title_ex)

        links = entry.alternate_links + entry.other_links
        synd_entry.links = [
            self.create_synd_link(link) for link in links if link.rel != ENCLOSURE_REL
        ]
        synd_entry.enclosures = [
            SyndEnclosureImpl(link.href_resolved, link.length, link.type)
            for link in links
            if link.rel == ENCLOSURE_REL
        ]
        if entry.alternate_links:
            synd_entry.link = entry.alternate_links[0].href_resolved

        synd_entry.description = self.create_synd_content(entry.summary)
        synd_entry.contents = [self.create_synd_content(c) for c in entry.contents]

        published = entry.published or entry.created
        if published is not None:
            synd_entry.published_date = published
        synd_entry.updated_date = entry.updated

        synd_entry.authors = [self.create_synd_person(p) for p in entry.authors]
        synd_entry.contributors = [self.create_synd_person(p) for p in entry.contributors]
        synd_entry.categories = [self.create_synd_category(c) for c in entry.categories]

        if entry.source is not None:
            source = SyndFeedImpl()
            self.copy_into(entry.source, source)
            synd_entry.source = source
        return synd_entry

    def create_real_feed(self, synd_feed: SyndFeed) -> atom.Feed:
        feed = atom.Feed(self.feed_type)
        feed.modules = clone_modules(synd_feed.modules)
        feed.encoding = synd_feed.encoding
        feed.id = synd_feed.uri
        feed.title_ex = self.create_atom_content(synd_feed.title_ex)
        feed.subtitle = self.create_atom_content(synd_feed.description_ex)

        self._split_links(feed, synd_feed.links, synd_feed.link)

        feed.authors = [self.create_atom_person(p) for p in synd_feed.authors]
        if not feed.authors and synd_feed.author:
            feed.authors = [atom.Person(name=synd_feed.author)]
            _drop_dc_values(feed.modules, "creators")
        feed.contributors = [self.create_atom_person(p) for p in synd_feed.contributors]
        if self.native_categories:
            feed.categories = [self.create_atom_category(c) for c in synd_feed.categories]
            _drop_dc_values(feed.modules, "subjects")

        feed.rights = synd_feed.copyright
        feed.language = synd_feed.language
        feed.updated = synd_feed.published_date
        _drop_dc_values(feed.modules, "rights_list", "languages", "dates")
        if synd_feed.generator:
            feed.generator = atom.Generator(synd_feed.generator)
        if synd_feed.image is not None:
            feed.logo = synd_feed.image.url

        feed.entries = [self.create_atom_entry(entry) for entry in synd_feed.entries]
        return feed

    def create_atom_content(self, content: SyndContent | None) -> atom.Content | None:
        if content is None:
            return None
        return atom.Content(content.value, type=content.type, mode=content.mode)

    def create_atom_link(self, link) -> atom.Link:
        return atom.Link(
            href=link.href,
            rel=link.rel,
            type=link.type,
            hreflang=link.hreflang,
            title=link.title,
            length=link.length,
        )

    def create_atom_person(self, person) -> atom.Person:
        return atom.Person(person.name, person.uri, person.email)

    def create_atom_category(self, category) -> atom.Category:
        return atom.Category(category.name, category.taxonomy_uri)

    def _split_links(self, target, links: list, link: str | None) -> None:
        atom_links = [self.create_atom_link(l) for l in links]
        target.alternate_links = [l for l in atom_links if l.rel == "alternate"]
        target.other_links = [l for l in atom_links if l.rel != "alternate"]
        if not target.alternate_links and link:
            target.alternate_links = [atom.Link(href=link)]

    def create_atom_entry(self, synd_entry: SyndEntry) -> atom.Entry:
        entry = atom.Entry()
        entry.modules = clone_modules(synd_entry.modules)
        entry.id = synd_entry.uri
        entry.title_ex = self.create_atom_content(synd_entry.title_ex)

        self._split_links(entry, synd_entry.links, synd_entry.link)
        entry.other_links.extend(
            atom.Link(href=e.url, rel=ENCLOSURE_REL, type=e.type, length=e.length)
            for e in synd_entry.enclosures
        )

        entry.summary = self.create_atom_content(synd_entry.description)
        entry.contents = [self.create_atom_content(c) for c in synd_entry.contents]

        entry.published = synd_entry.published_date
        entry.updated = synd_entry.updated_date
        _drop_dc_values(entry.modules, "dates")

        entry.authors = [self.create_atom_person(p) for p in synd_entry.authors]
        if not entry.authors and synd_entry.author:
            entry.authors = [atom.Person(name=synd_entry.author)]
            _drop_dc_values(entry.modules, "creators")
        entry.contributors = [self.create_atom_person(p) for p in synd_entry.contributors]
        entry.categories = [self.create_atom_category(c) for c in synd_entry.categories]

        if synd_entry.source is not None:
            entry.source = self.create_real_feed(synd_entry.source)
        return entry


class Atom03Converter(Atom10Converter):
    feed_type = ATOM_03
    native_categories = False


CONVERTERS: dict[str, Converter] = {
    converter.feed_type: converter
    for converter in (
        RSS090Converter(),
        RSS091NetscapeConverter(),
        RSS091UserlandConverter(),
        RSS092Converter(),
        RSS093Converter(),
        RSS094Converter(),
        RSS10Converter(),
        RSS20Converter(),
        Atom03Converter(),
        Atom10Converter(),
    )
}


def get_converter(feed_type: str) -> Converter:
    """Return the converter registered for a feed type.

    Raises:
        UnsupportedFeedTypeError: If no converter handles ``feed_type``
    """
    try:
        return CONVERTERS[feed_type]
    except KeyError:
        raise UnsupportedFeedTypeError(f"Invalid feed type [{feed_type}]") from None
