"""One-shot scan pass: match, classify, report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from feedwatch.analysis.matcher import find_matches
from feedwatch.analysis.reporter import build_reports
from feedwatch.analysis.sentiment import Lexicon, classify
from feedwatch.models import FeedArticle, Match, SentimentScore, TickerReport, TrackedTicker


@dataclass(frozen=True)
class ScanResult:
    """Output of a scan pass."""

    matches: List[Match] = field(default_factory=list)
    scores: Dict[Match, SentimentScore] = field(default_factory=dict)
    reports: List[TickerReport] = field(default_factory=list)


def score_matches(
    matches: Sequence[Match],
    lexicon: Optional[Lexicon] = None,
) -> Dict[Match, SentimentScore]:
    """Classify the text of each matched article."""
    return {match: classify(match.article.text, lexicon) for match in matches}


def run_scan(
    articles: Sequence[FeedArticle],
    tickers: Sequence[TrackedTicker],
    lexicon: Optional[Lexicon] = None,
) -> ScanResult:
    """Run matching, classification and reporting over one batch of articles.

    Args:
        articles: Articles already fetched from all feeds.
        tickers: Tracked tickers, in the order reports should appear.
        lexicon: Sentiment keywords. Defaults to the packaged lexicon.

    Returns:
        Matches, per-match scores and per-ticker reports.
    """
    matches = find_matches(articles, tickers)
    scores = score_matches(matches, lexicon)
    reports = build_reports(matches, scores, tickers)
    return ScanResult(matches=matches, scores=scores, reports=reports)
