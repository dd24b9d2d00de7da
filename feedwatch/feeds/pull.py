"""RSS feed fetching.

Fetches public RSS/Atom feeds over HTTP without requiring API keys.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from feedwatch.config import get_config
from feedwatch.feeds.parse import FeedParseError, FeedResult, parse_feed
from feedwatch.logging_setup import get_logger, log_fields
from feedwatch.models import FeedArticle

logger = get_logger("feeds.pull")


class FeedError(Exception):
    """Raised when a feed cannot be fetched or parsed."""

    pass


def fetch_feed(url: str, timeout: Optional[float] = None) -> FeedResult:
    """Fetch and parse a single feed.

    Args:
        url: Feed URL.
        timeout: Request timeout in seconds. Defaults to config value.

    Returns:
        Feed title and up to the configured number of newest articles.

    Raises:
        FeedError: On HTTP, network or parse failure.
    """
    config = get_config().feeds
    if timeout is None:
        timeout = config.timeout

    req = Request(url, headers={"User-Agent": config.user_agent})
    try:
        with urlopen(req, timeout=timeout) as response:
            content = response.read()
    except HTTPError as e:
        raise FeedError(f"HTTP error {e.code}") from e
    except URLError as e:
        raise FeedError(f"URL error: {e.reason}") from e
    except TimeoutError as e:
        raise FeedError("Request timed out") from e
    except ValueError as e:
        raise FeedError(f"Invalid feed URL: {e}") from e

    try:
        result = parse_feed(content, source_url=url, max_articles=config.max_articles)
    except FeedParseError as e:
        raise FeedError(str(e)) from e

    log_fields(
        logger,
        logging.INFO,
        "Fetched %d articles from %s",
        len(result.articles),
        url,
        url=url,
        feed_title=result.title,
        articles=len(result.articles),
    )
    return result


def fetch_articles(urls: Iterable[str]) -> List[FeedArticle]:
    """Fetch all feeds and concatenate their articles in feed order.

    Feeds that fail are logged and skipped.
    """
    articles: List[FeedArticle] = []

    for url in urls:
        try:
            result = fetch_feed(url)
        except FeedError as e:
            logger.warning("Error fetching %s: %s", url, e)
            continue
        articles.extend(result.articles)

    return articles
