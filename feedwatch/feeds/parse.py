"""RSS 2.0 and Atom parsing into feed articles."""

from __future__ import annotations

import html
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import List, Optional

from feedwatch.logging_setup import get_logger
from feedwatch.models import FeedArticle

logger = get_logger("feeds.parse")

ATOM_NS = "{http://www.w3.org/2005/Atom}"
CONTENT_NS = "{http://purl.org/rss/1.0/modules/content/}"
DC_NS = "{http://purl.org/dc/elements/1.1/}"

UNTITLED_FEED = "Untitled Feed"
UNTITLED_ARTICLE = "Untitled"


class FeedParseError(Exception):
    """Raised when feed content is not parseable XML."""

    pass


@dataclass
class FeedResult:
    """Parsed feed: its title and newest articles."""

    title: str
    articles: List[FeedArticle] = field(default_factory=list)


def parse_date(date_str: Optional[str]) -> Optional[datetime]:
    """Parse RSS (RFC 822) and Atom (ISO 8601) dates to aware datetimes."""
    if not date_str:
        return None

    date_str = re.sub(r"\s+", " ", date_str.strip())

    formats = [
        "%a, %d %b %Y %H:%M:%S %z",  # RFC 822
        "%a, %d %b %Y %H:%M:%S GMT",
        "%Y-%m-%dT%H:%M:%S%z",  # ISO 8601
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%dT%H:%M:%S.%f%z",
        "%Y-%m-%dT%H:%M:%S.%fZ",
    ]
    for fmt in formats:
        try:
            dt = datetime.strptime(date_str, fmt)
        except ValueError:
            continue
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt

    try:
        dt = parsedate_to_datetime(date_str)
    except (TypeError, ValueError):
        logger.debug("Could not parse date: %s", date_str)
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def clean_text(text: Optional[str]) -> str:
    """Strip HTML tags, decode entities and normalize whitespace."""
    if not text:
        return ""

    text = re.sub(r"<[^>]+>", " ", text)
    text = html.unescape(text)
    return re.sub(r"\s+", " ", text).strip()


def _get_text(element: Optional[ET.Element], default: str = "") -> str:
    """Safely get text from XML element."""
    if element is None:
        return default
    return element.text or default


def _first_text(parent: ET.Element, *tags: str) -> str:
    """Text of the first tag that is present and non-empty."""
    for tag in tags:
        value = _get_text(parent.find(tag))
        if value:
            return value
    return ""


def _atom_link(entry: ET.Element) -> str:
    """Prefer rel="alternate" (or no rel) links over others."""
    links = entry.findall(f"{ATOM_NS}link")
    for link in links:
        if link.get("rel", "alternate") == "alternate" and link.get("href"):
            return link.get("href", "")
    for link in links:
        if link.get("href"):
            return link.get("href", "")
    return ""


def _parse_atom(root: ET.Element, source_url: str, max_articles: int) -> FeedResult:
    title = clean_text(_get_text(root.find(f"{ATOM_NS}title"))) or UNTITLED_FEED

    articles: List[FeedArticle] = []
    for entry in root.findall(f"{ATOM_NS}entry")[:max_articles]:
        summary = _first_text(entry, f"{ATOM_NS}summary", f"{ATOM_NS}content")
        published = _first_text(entry, f"{ATOM_NS}published", f"{ATOM_NS}updated")

        articles.append(
            FeedArticle(
                title=clean_text(_get_text(entry.find(f"{ATOM_NS}title"))) or UNTITLED_ARTICLE,
                summary=clean_text(summary),
                link=_atom_link(entry),
                published=parse_date(published),
                source=source_url,
            )
        )

    return FeedResult(title=title, articles=articles)


def _parse_rss(root: ET.Element, source_url: str, max_articles: int) -> FeedResult:
    channel = root.find("channel")
    if channel is None:
        channel = root
    title = clean_text(_get_text(channel.find("title"))) or UNTITLED_FEED

    items = channel.findall("item") or root.findall(".//item")

    articles: List[FeedArticle] = []
    for item in items[:max_articles]:
        summary = _first_text(item, "description", f"{CONTENT_NS}encoded")

        articles.append(
            FeedArticle(
                title=clean_text(_get_text(item.find("title"))) or UNTITLED_ARTICLE,
                summary=clean_text(summary),
                link=_get_text(item.find("link")).strip(),
                published=parse_date(_first_text(item, "pubDate", f"{DC_NS}date")),
                source=source_url,
            )
        )

    return FeedResult(title=title, articles=articles)


def parse_feed(
    xml_content: str | bytes, source_url: str = "", max_articles: int = 10
) -> FeedResult:
    """Parse RSS or Atom XML.

    Args:
        xml_content: Raw feed document.
        source_url: URL the feed came from, recorded on each article.
        max_articles: Keep at most this many entries, in feed order.

    Returns:
        Feed title and articles.

    Raises:
        FeedParseError: If the content is not well-formed XML.
    """
    try:
        root = ET.fromstring(xml_content)
    except ET.ParseError as e:
        raise FeedParseError(f"XML parse error: {e}") from e

    if root.tag == f"{ATOM_NS}feed":
        result = _parse_atom(root, source_url, max_articles)
    else:
        result = _parse_rss(root, source_url, max_articles)

    logger.debug("Parsed %d articles from %s", len(result.articles), source_url or "feed")
    return result
