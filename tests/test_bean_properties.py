"""Property-based tests for cloning, equality and copy_from of synd beans."""

from datetime import UTC, datetime

from hypothesis import given
from hypothesis import strategies as st

from syndbind.synd import (
    SyndCategoryImpl,
    SyndContentImpl,
    SyndEnclosureImpl,
    SyndLinkImpl,
    SyndPersonImpl,
)
from syndbind.synd_entry import SyndEntryImpl
from syndbind.synd_feed import SyndFeedImpl

texts = st.one_of(st.none(), st.text(max_size=30))
names = st.text(min_size=1, max_size=30)
urls = st.from_regex(r"https://example\.com/[a-z0-9]{1,12}", fullmatch=True)
dates = st.one_of(
    st.none(),
    st.datetimes(
        min_value=datetime(1990, 1, 1), max_value=datetime(2100, 1, 1), timezones=st.just(UTC)
    ),
)

contents = st.builds(SyndContentImpl, value=texts, type=texts, mode=texts)
persons = st.builds(SyndPersonImpl, name=texts, uri=texts, email=texts)
categories = st.builds(SyndCategoryImpl, name=names, taxonomy_uri=texts)
enclosures = st.builds(
    SyndEnclosureImpl, url=urls, length=st.integers(min_value=0, max_value=10**9), type=texts
)
links = st.builds(SyndLinkImpl, href=urls, rel=st.sampled_from(["alternate", "self"]))


@st.composite
def entries(draw):
    entry = SyndEntryImpl()
    entry.uri = draw(st.one_of(st.none(), urls))
    entry.title = draw(texts)
    entry.link = draw(st.one_of(st.none(), urls))
    entry.description = draw(st.one_of(st.none(), contents))
    entry.contents = draw(st.lists(contents, max_size=2))
    entry.links = draw(st.lists(links, max_size=2))
    entry.enclosures = draw(st.lists(enclosures, max_size=2))
    entry.categories = draw(st.lists(categories, max_size=3))
    entry.authors = draw(st.lists(persons, max_size=2))
    entry.published_date = draw(dates)
    entry.updated_date = draw(dates)
    author = draw(st.one_of(st.none(), names))
    if author is not None:
        entry.author = author
    return entry


@st.composite
def feeds(draw):
    feed = SyndFeedImpl()
    feed.feed_type = draw(st.sampled_from(["rss_2.0", "atom_1.0", "rss_1.0"]))
    feed.title = draw(texts)
    feed.link = draw(st.one_of(st.none(), urls))
    feed.description = draw(texts)
    feed.language = draw(st.one_of(st.none(), st.sampled_from(["en", "fr", "it"])))
    feed.copyright = draw(texts)
    feed.published_date = draw(dates)
    feed.categories = draw(st.lists(categories, max_size=3))
    feed.entries = draw(st.lists(entries(), max_size=3))
    return feed


class TestBeanProperties:
    """Property-based tests for the bean engine on synd beans."""

    @given(entries())
    def test_clone_equals_original(self, entry):
        """
        For any entry, its clone is equal to it and has the same hash.
        """
        cloned = entry.clone()

        assert cloned == entry
        assert hash(cloned) == hash(entry)
        assert cloned.author == entry.author
        assert cloned.published_date == entry.published_date

    @given(feeds())
    def test_feed_clone_equals_original(self, feed):
        """
        For any feed, its clone is equal to it, convenience properties included.
        """
        cloned = feed.clone()

        assert cloned == feed
        assert hash(cloned) == hash(feed)
        assert cloned.language == feed.language
        assert list(cloned.categories) == list(feed.categories)

    @given(entries(), names)
    def test_clone_is_independent(self, entry, new_title):
        """
        For any entry, mutating the clone never changes the original.
        """
        original_title = entry.title
        original_categories = len(entry.categories)
        cloned = entry.clone()

        cloned.title = new_title
        cloned.categories.append(SyndCategoryImpl("added"))

        assert entry.title == original_title
        assert len(entry.categories) == original_categories

    @given(entries())
    def test_copy_from_yields_equal_entry(self, entry):
        """
        For any entry, copy_from into a fresh entry produces an equal entry.
        """
        copy = SyndEntryImpl()
        copy.copy_from(entry)

        assert copy == entry
        assert copy.author == entry.author
        assert copy.published_date == entry.published_date

    @given(feeds())
    def test_copy_from_yields_equal_feed(self, feed):
        """
        For any feed, copy_from into a fresh feed produces an equal feed.
        """
        copy = SyndFeedImpl()
        copy.copy_from(feed)

        assert copy == feed
        assert copy.copyright == feed.copyright

    @given(entries())
    def test_equal_entries_hash_alike(self, entry):
        """
        For any pair of equal entries, hashes are equal.
        """
        other = SyndEntryImpl()
        other.copy_from(entry)
        if other == entry:
            assert hash(other) == hash(entry)
