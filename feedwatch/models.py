"""Plain data shapes shared by the feed, storage and analysis layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class Sentiment(str, Enum):
    """Sentiment label."""

    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TrackedTicker:
    """Ticker tracked by the user, with an optional company name for matching."""

    symbol: str
    company_name: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        """A ticker needs a non-blank symbol to take part in a scan."""
        return bool(self.symbol and self.symbol.strip())

    @property
    def display_name(self) -> str:
        if self.company_name:
            return f"{self.symbol} ({self.company_name})"
        return self.symbol


@dataclass(frozen=True)
class FeedArticle:
    """Article fetched from an RSS/Atom feed."""

    title: str
    summary: str = ""
    link: str = ""
    published: Optional[datetime] = None
    source: str = ""

    @property
    def text(self) -> str:
        """Title and summary joined, the text used for matching and scoring."""
        return f"{self.title} {self.summary}"


@dataclass(frozen=True)
class Match:
    """One article found to mention one tracked ticker."""

    article: FeedArticle
    ticker: TrackedTicker


@dataclass(frozen=True)
class SentimentScore:
    """Keyword sentiment of a text.

    ``intensity`` is positive hits minus negative hits.
    """

    label: Sentiment
    intensity: int
    positive_hits: int = 0
    negative_hits: int = 0


NEUTRAL_SCORE = SentimentScore(label=Sentiment.NEUTRAL, intensity=0)


@dataclass(frozen=True)
class TickerReport:
    """Per-ticker sentiment aggregate over one scan pass."""

    symbol: str
    company_name: Optional[str] = None
    total_matches: int = 0
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    net_intensity: int = 0
    links: Tuple[str, ...] = field(default_factory=tuple)

    def count(self, label: Sentiment) -> int:
        """Number of matched articles with the given label."""
        if label is Sentiment.POSITIVE:
            return self.positive
        if label is Sentiment.NEGATIVE:
            return self.negative
        return self.neutral
