"""Ticker matching for feed articles.

An article matches a tracked ticker when its title or summary contains the
ticker symbol as a standalone word, or contains the company name anywhere.
"""

from __future__ import annotations

from typing import Iterable, List

from feedwatch.analysis.text import contains_substring, contains_term
from feedwatch.models import FeedArticle, Match, TrackedTicker


def mentions_ticker(text: str, ticker: TrackedTicker) -> bool:
    """Check whether text mentions a ticker by symbol or company name.

    Args:
        text: Article text (title and summary).
        ticker: Tracked ticker. A blank symbol never matches.

    Returns:
        True if the symbol appears as a whole word (case-insensitive) or the
        non-empty company name appears as a case-insensitive substring.
    """
    if not ticker.is_valid:
        return False
    if contains_term(text, ticker.symbol):
        return True
    if ticker.company_name:
        return contains_substring(text, ticker.company_name)
    return False


def find_matches(
    articles: Iterable[FeedArticle],
    tickers: Iterable[TrackedTicker],
) -> List[Match]:
    """Find every (article, ticker) pair where the article mentions the ticker.

    Args:
        articles: Articles from one scan pass.
        tickers: Tracked tickers. Tickers with a blank symbol are skipped.

    Returns:
        Matches ordered by article, then by ticker within an article.
    """
    valid = [t for t in tickers if t.is_valid]
    matches: List[Match] = []

    for article in articles:
        text = article.text
        for ticker in valid:
            if mentions_ticker(text, ticker):
                matches.append(Match(article=article, ticker=ticker))

    return matches
