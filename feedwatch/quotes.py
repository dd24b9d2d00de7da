"""Stock quotes from the Yahoo Finance chart API.

Fetches the current price and a short daily close history for a ticker.
No API key is required.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from feedwatch.config import get_config
from feedwatch.logging_setup import get_logger

logger = get_logger("quotes")

# The chart endpoint rejects requests without a browser-like agent
QUOTE_USER_AGENT = "Mozilla/5.0"


class QuoteError(Exception):
    """Raised when a quote or price history cannot be retrieved."""

    pass


@dataclass
class StockQuote:
    """Latest price for a ticker."""

    ticker: str
    price: float
    change: float
    change_percent: float
    date: str  # YYYY-MM-DD


@dataclass
class DailyPrice:
    """Daily close."""

    date: str  # YYYY-MM-DD
    close: float


@dataclass
class PriceHistory:
    """Daily closes for a ticker, oldest first."""

    ticker: str
    prices: List[DailyPrice] = field(default_factory=list)


def history_range(days: int) -> str:
    """Map a day count onto the chart API's range parameter."""
    if days <= 5:
        return "5d"
    if days <= 30:
        return "1mo"
    if days <= 90:
        return "3mo"
    return "6mo"


def _chart_url(ticker: str, range_: str) -> str:
    base_url = get_config().quotes.base_url
    return f"{base_url}/{quote(ticker.upper())}?range={range_}&interval=1d"


def _fetch_chart(url: str, timeout: Optional[float] = None) -> Dict[str, Any]:
    """Fetch a chart payload as JSON."""
    if timeout is None:
        timeout = get_config().quotes.timeout

    req = Request(url, headers={"User-Agent": QUOTE_USER_AGENT})
    try:
        with urlopen(req, timeout=timeout) as response:
            content = response.read().decode("utf-8", errors="replace")
    except HTTPError as e:
        raise QuoteError(f"HTTP error {e.code} fetching {url}") from e
    except URLError as e:
        raise QuoteError(f"URL error fetching {url}: {e.reason}") from e
    except TimeoutError as e:
        raise QuoteError(f"Timeout fetching {url}") from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise QuoteError(f"Invalid JSON from {url}: {e}") from e


def _first_result(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Extract the first chart result, raising on API errors."""
    chart = payload.get("chart") or {}

    error = chart.get("error")
    if error:
        if isinstance(error, dict):
            error = error.get("description", "unknown error")
        raise QuoteError(f"Yahoo Finance error: {error}")

    results = chart.get("result") or []
    if not results:
        raise QuoteError("No data returned for ticker")
    return results[0]


def parse_quote(payload: Dict[str, Any], ticker: str, today: Optional[str] = None) -> StockQuote:
    """Build a quote from a chart payload.

    Change is measured against the previous close; when the previous close
    is missing the price itself is used, giving zero change.
    """
    meta = _first_result(payload).get("meta") or {}

    price = float(meta.get("regularMarketPrice") or 0.0)
    previous_close = meta.get("previousClose")
    previous_close = float(previous_close) if previous_close is not None else price

    change = price - previous_close
    change_percent = (change / previous_close) * 100.0 if previous_close > 0 else 0.0

    if today is None:
        today = datetime.now().strftime("%Y-%m-%d")

    return StockQuote(
        ticker=ticker.upper(),
        price=price,
        change=change,
        change_percent=change_percent,
        date=today,
    )


def parse_history(payload: Dict[str, Any], ticker: str) -> PriceHistory:
    """Build a daily price history from a chart payload, skipping null closes."""
    result = _first_result(payload)

    timestamps = result.get("timestamp") or []
    quotes = (result.get("indicators") or {}).get("quote") or []
    closes = (quotes[0].get("close") if quotes else None) or []

    prices: List[DailyPrice] = []
    for ts, close in zip(timestamps, closes):
        if close is None:
            continue
        date = datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d")
        prices.append(DailyPrice(date=date, close=float(close)))

    return PriceHistory(ticker=ticker.upper(), prices=prices)


def fetch_quote(ticker: str) -> StockQuote:
    """Fetch the current quote for a ticker.

    Raises:
        QuoteError: On network failure, API error or empty result.
    """
    payload = _fetch_chart(_chart_url(ticker, "1d"))
    quote_ = parse_quote(payload, ticker)
    logger.info("Fetched quote for %s: %.2f", quote_.ticker, quote_.price)
    return quote_


def fetch_history(ticker: str, days: Optional[int] = None) -> PriceHistory:
    """Fetch daily closes covering roughly the last ``days`` days.

    Raises:
        QuoteError: On network failure, API error or empty result.
    """
    if days is None:
        days = get_config().quotes.history_days

    payload = _fetch_chart(_chart_url(ticker, history_range(days)))
    history = parse_history(payload, ticker)
    logger.info("Fetched %d daily prices for %s", len(history.prices), history.ticker)
    return history
