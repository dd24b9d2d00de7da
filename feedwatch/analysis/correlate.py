"""Line up matched articles with the stock price on their publication day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from feedwatch.models import Match, Sentiment, SentimentScore
from feedwatch.quotes import DailyPrice


@dataclass
class Correlation:
    """One matched article next to the price move of its day."""

    date: str  # YYYY-MM-DD, empty when the article has no date
    article_title: str
    sentiment: Sentiment
    price: Optional[float] = None
    price_change: Optional[float] = None  # Percent vs previous trading day


def _price_table(prices: Iterable[DailyPrice]) -> Dict[str, Tuple[float, Optional[float]]]:
    """Map date -> (close, percent change vs previous row)."""
    df = pd.DataFrame(
        [{"date": p.date, "close": p.close} for p in prices], columns=["date", "close"]
    )
    if df.empty:
        return {}

    df["change_pct"] = df["close"].pct_change() * 100.0

    table: Dict[str, Tuple[float, Optional[float]]] = {}
    for row in df.itertuples(index=False):
        if row.date in table:
            continue
        change = None if pd.isna(row.change_pct) else float(row.change_pct)
        table[row.date] = (float(row.close), change)
    return table


def correlate(
    matches: Iterable[Match],
    scores: Mapping[Match, SentimentScore],
    prices: Iterable[DailyPrice],
) -> List[Correlation]:
    """Pair each match with the close and daily change on its article's date.

    Args:
        matches: Matches, usually for a single ticker.
        scores: Sentiment score of each match.
        prices: Daily closes, oldest first.

    Returns:
        One correlation per match, in match order. Price fields are None
        when no close exists for the date; the change is None for the
        first day of the history.
    """
    table = _price_table(prices)

    correlations: List[Correlation] = []
    for match in matches:
        published = match.article.published
        # Price dates are UTC trading days
        date = published.astimezone(timezone.utc).strftime("%Y-%m-%d") if published else ""
        price, change = table.get(date, (None, None))

        correlations.append(
            Correlation(
                date=date,
                article_title=match.article.title,
                sentiment=scores[match].label,
                price=price,
                price_change=change,
            )
        )

    return correlations
