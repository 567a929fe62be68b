"""Base bean of dialect-specific (wire) feeds and the known feed types."""

from .bean import ObjectBean, list_property
from .modules import Module, lookup_module

RSS_090 = "rss_0.9"
RSS_091_NETSCAPE = "rss_0.91N"
RSS_091_USERLAND = "rss_0.91U"
RSS_092 = "rss_0.92"
RSS_093 = "rss_0.93"
RSS_094 = "rss_0.94"
RSS_10 = "rss_1.0"
RSS_20 = "rss_2.0"
ATOM_03 = "atom_0.3"
ATOM_10 = "atom_1.0"

FEED_TYPES = (
    RSS_090,
    RSS_091_NETSCAPE,
    RSS_091_USERLAND,
    RSS_092,
    RSS_093,
    RSS_094,
    RSS_10,
    RSS_20,
    ATOM_03,
    ATOM_10,
)


class WireFeed(ObjectBean):
    """Parent class of the RSS (Channel) and Atom (Feed) feed beans.

    Holds what every dialect has in common: the feed type, the encoding of
    the document it was read from and its extension modules.
    """

    PROPERTIES = ("feed_type", "encoding", "modules")

    sparse_properties = frozenset({"modules"})
    modules = list_property("modules")

    def __init__(self, feed_type: str | None = None):
        self.feed_type = feed_type
        self.encoding: str | None = None

    def get_module(self, uri: str) -> Module | None:
        return lookup_module(self.modules, uri)
