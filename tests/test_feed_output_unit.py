"""Unit tests for writing wire feeds and synd feeds as XML."""

from datetime import UTC, datetime

import pytest
from bs4 import BeautifulSoup

from syndbind.config import Config
from syndbind.exceptions import UnsupportedFeedTypeError
from syndbind.feed_input import SyndFeedInput
from syndbind.feed_output import (
    DC_URI,
    FeedGenerator,
    RSSGenerator,
    SyndFeedOutput,
    WireFeedOutput,
    create_generator,
)
from syndbind.georss import GEORSS_URI, GeoRSSModuleImpl, Point, Position
from syndbind.modules import SY_URI
from syndbind.synd import SyndCategoryImpl, SyndContentImpl, SyndEnclosureImpl, SyndPersonImpl
from syndbind.synd_entry import SyndEntryImpl
from syndbind.synd_feed import SyndFeedImpl
from syndbind.wire_feed import (
    ATOM_03,
    ATOM_10,
    FEED_TYPES,
    RSS_090,
    RSS_091_NETSCAPE,
    RSS_091_USERLAND,
    RSS_092,
    RSS_093,
    RSS_10,
    RSS_20,
)

PUBLISHED = datetime(2024, 1, 2, 10, 0, tzinfo=UTC)


def make_feed(title: str = "Round trip") -> SyndFeedImpl:
    feed = SyndFeedImpl()
    feed.title = title
    feed.link = "http://example.com/"
    feed.description = "Written and read back"
    feed.language = "en"
    feed.published_date = PUBLISHED
    feed.categories = [SyndCategoryImpl("News", "http://example.com/tax")]

    entry = SyndEntryImpl()
    entry.uri = "urn:uuid:1"
    entry.title = "Entry"
    entry.link = "http://example.com/1"
    entry.description = SyndContentImpl("Summary")
    entry.contents = [SyndContentImpl("<p>Body</p>", type="text/html")]
    entry.published_date = PUBLISHED
    entry.authors = [SyndPersonImpl("Alice", email="alice@example.com")]
    entry.categories = [SyndCategoryImpl("Tech")]
    entry.enclosures = [SyndEnclosureImpl("http://example.com/1.mp3", 1234, "audio/mpeg")]
    feed.entries = [entry]
    return feed


@pytest.fixture
def output(monkeypatch):
    for name in ("SYNDBIND_PRETTY_PRINT", "SYNDBIND_ENCODING", "SYNDBIND_DEFAULT_FEED_TYPE"):
        monkeypatch.delenv(name, raising=False)
    return SyndFeedOutput(Config())


class TestSyndFeedOutputUnit:
    """Unit tests for SyndFeedOutput."""

    @pytest.mark.parametrize("feed_type", FEED_TYPES)
    def test_round_trip(self, output, feed_type):
        """Every dialect written is read back as the same dialect."""
        xml = output.output_string(make_feed(), feed_type)
        feed = SyndFeedInput().build(xml)

        assert feed.feed_type == feed_type
        assert feed.title == "Round trip"
        assert feed.link == "http://example.com/"
        assert feed.entries[0].title == "Entry"
        assert feed.entries[0].link == "http://example.com/1"

    def test_rss20_document(self, output):
        soup = BeautifulSoup(output.output_string(make_feed(), RSS_20), "xml")

        assert soup.rss["version"] == "2.0"
        channel = soup.rss.channel
        assert channel.language.string == "en"
        assert channel.pubDate.string == "Tue, 02 Jan 2024 10:00:00 GMT"
        assert channel.category["domain"] == "http://example.com/tax"

        item = channel.item
        assert item.guid.string == "urn:uuid:1"
        assert item.guid["isPermaLink"] == "false"
        assert item.author.string == "alice@example.com"
        assert item.enclosure["length"] == "1234"
        assert item.enclosure["type"] == "audio/mpeg"
        assert item.find("encoded").string == "<p>Body</p>"

    def test_rss20_round_trip_details(self, output):
        feed = SyndFeedInput().build(output.output_string(make_feed(), RSS_20))

        assert feed.language == "en"
        assert feed.published_date == PUBLISHED
        assert [c.name for c in feed.categories] == ["News"]
        entry = feed.entries[0]
        assert entry.uri == "urn:uuid:1"
        assert entry.published_date == PUBLISHED
        assert entry.contents[0].value == "<p>Body</p>"
        assert entry.enclosures[0].length == 1234

    @pytest.mark.parametrize(
        "feed_type",
        [RSS_090, RSS_091_NETSCAPE, RSS_091_USERLAND, RSS_092, RSS_093, RSS_10, ATOM_03, ATOM_10],
    )
    def test_entry_author_survives_round_trip(self, output, feed_type):
        """Dialects without an item author element carry authors as dc:creator."""
        feed = SyndFeedInput().build(output.output_string(make_feed(), feed_type))
        assert feed.entries[0].author == "Alice"

    def test_permalink_guid_is_written_back_unchanged(self, output):
        document = """<?xml version="1.0"?>
<rss version="2.0">
  <channel>
    <title>Guids</title>
    <link>http://Example.com/</link>
    <description>Mixed-case host</description>
    <item><title>A</title><guid isPermaLink="true">http://Example.com/a</guid></item>
  </channel>
</rss>
"""
        feed = SyndFeedInput().build(document)
        soup = BeautifulSoup(output.output_string(feed, RSS_20), "xml")

        guid = soup.rss.channel.item.guid
        assert guid.string == "http://Example.com/a"
        assert guid["isPermaLink"] == "true"

    def test_atom_links_keep_missing_type(self, output):
        feed = make_feed()
        feed.entries[0].enclosures = [SyndEnclosureImpl("http://example.com/1.mp3", 10)]

        feed = SyndFeedInput().build(output.output_string(feed, ATOM_10))
        soup = BeautifulSoup(output.output_string(feed, ATOM_10), "xml")

        for link in soup.feed.entry.find_all("link"):
            assert not link.has_attr("type")

    def test_empty_looked_up_module_is_not_declared(self, output):
        feed = make_feed()
        feed.get_module(SY_URI)
        feed.entries[0].get_module(GEORSS_URI)

        xml = output.output_string(feed, RSS_20)

        assert "xmlns:sy" not in xml
        assert "xmlns:georss" not in xml

    def test_rss092_has_no_guid_or_dates(self, output):
        soup = BeautifulSoup(output.output_string(make_feed(), RSS_092), "xml")
        item = soup.rss.channel.item

        assert item.guid is None
        assert item.pubDate is None
        assert item.enclosure is not None

    def test_netscape_doctype(self, output):
        xml = output.output_string(make_feed(), RSS_091_NETSCAPE)
        assert "<!DOCTYPE rss PUBLIC" in xml
        assert '<rss version="0.91">' in xml

    def test_rss10_declares_module_namespaces(self, output):
        xml = output.output_string(make_feed(), RSS_10)
        soup = BeautifulSoup(xml, "xml")

        root = soup.find("RDF")
        assert root["xmlns:dc"] == DC_URI
        assert root["xmlns:content"] == "http://purl.org/rss/1.0/modules/content/"
        assert "<dc:language>en</dc:language>" in xml
        assert "<dc:date>2024-01-02T10:00:00Z</dc:date>" in xml
        assert soup.find("item")["rdf:about"] == "urn:uuid:1"

    def test_georss_point(self, output):
        feed = make_feed()
        feed.entries[0].modules.append(GeoRSSModuleImpl(Point(Position(45.256, -71.92))))

        xml = output.output_string(feed, ATOM_10)

        assert f'xmlns:georss="{GEORSS_URI}"' in xml
        assert "<georss:point>45.256 -71.92</georss:point>" in xml

    def test_atom10_document(self, output):
        soup = BeautifulSoup(output.output_string(make_feed(), ATOM_10), "xml")

        root = soup.feed
        assert root["xml:lang"] == "en"
        assert root.title.string == "Round trip"
        assert root.updated.string == "2024-01-02T10:00:00Z"
        assert root.category["term"] == "News"

        entry = root.entry
        assert entry.id.string == "urn:uuid:1"
        assert entry.author.find("name").string == "Alice"
        assert entry.content["type"] == "html"
        links = {link["rel"]: link["href"] for link in entry.find_all("link")}
        assert links == {
            "alternate": "http://example.com/1",
            "enclosure": "http://example.com/1.mp3",
        }

    def test_atom03_document(self, output):
        soup = BeautifulSoup(output.output_string(make_feed(), ATOM_03), "xml")

        assert soup.feed["version"] == "0.3"
        assert soup.feed.title["mode"] == "escaped"
        assert soup.feed.modified.string == "2024-01-02T10:00:00Z"
        assert soup.feed.entry.issued.string == "2024-01-02T10:00:00Z"

    def test_uses_feed_type_of_the_feed(self, output):
        feed = make_feed()
        feed.feed_type = ATOM_10
        assert "<feed" in output.output_string(feed)

    def test_falls_back_to_configured_type(self, monkeypatch):
        monkeypatch.setenv("SYNDBIND_DEFAULT_FEED_TYPE", ATOM_03)
        xml = SyndFeedOutput(Config()).output_string(make_feed())
        assert 'version="0.3"' in xml

    def test_compact_and_pretty(self, output):
        compact = output.output_string(make_feed(), RSS_20)
        pretty = output.output_string(make_feed(), RSS_20, pretty=True)

        assert compact.startswith("<?xml")
        assert pretty.startswith("<?xml")
        assert len(pretty.splitlines()) > len(compact.splitlines())

    def test_output_file_uses_configured_encoding(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SYNDBIND_ENCODING", "iso-8859-1")
        path = tmp_path / "feed.xml"

        SyndFeedOutput(Config()).output_file(make_feed("Café"), path, RSS_20)

        data = path.read_bytes()
        assert b'encoding="iso-8859-1"' in data
        assert "Café".encode("iso-8859-1") in data
        assert SyndFeedInput().build_file(path).title == "Café"


class TestWireFeedOutputUnit:
    """Unit tests for WireFeedOutput and the generators."""

    def test_output_wire_feed(self):
        channel = make_feed().create_wire_feed(RSS_20)
        xml = WireFeedOutput(Config()).output_string(channel)
        assert '<rss version="2.0">' in xml

    def test_unknown_feed_type(self):
        with pytest.raises(UnsupportedFeedTypeError):
            create_generator("rss_3.0")
        with pytest.raises(UnsupportedFeedTypeError):
            create_generator(None)

    def test_feed_generator_is_abstract(self):
        with pytest.raises(TypeError):
            FeedGenerator()

    def test_rss_levels(self):
        assert RSSGenerator(RSS_20).at_least(RSS_092)
        assert not RSSGenerator(RSS_091_NETSCAPE).at_least(RSS_092)
