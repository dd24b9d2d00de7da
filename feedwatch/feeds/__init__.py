"""Feed ingestion.

Modules:
    parse: Parse RSS 2.0 and Atom documents into articles
    pull: Fetch feeds over HTTP
"""

from feedwatch.feeds.parse import FeedResult, parse_feed
from feedwatch.feeds.pull import FeedError, fetch_articles, fetch_feed

__all__ = [
    "FeedResult",
    "parse_feed",
    "FeedError",
    "fetch_articles",
    "fetch_feed",
]
