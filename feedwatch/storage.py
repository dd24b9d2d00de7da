"""Watch list persistence: subscribed feeds and tracked tickers.

Stored as pretty-printed JSON::

    {
      "feeds": ["https://example.com/rss"],
      "investments": [{"ticker": "AAPL", "name": "Apple"}]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from feedwatch.config import get_config
from feedwatch.logging_setup import get_logger
from feedwatch.models import TrackedTicker

logger = get_logger("storage")


class StorageError(Exception):
    """Raised when the watch list cannot be read, written or updated."""

    pass


def normalize_symbol(symbol: str) -> str:
    """Tickers are stored stripped and upper-cased."""
    return symbol.strip().upper()


def _parse_ticker(entry: Any) -> Optional[TrackedTicker]:
    """Parse one stored investment, None for malformed or blank entries."""
    if not isinstance(entry, dict):
        logger.warning("Skipping malformed investment entry: %r", entry)
        return None

    symbol = normalize_symbol(str(entry.get("ticker") or ""))
    if not symbol:
        logger.warning("Skipping investment with empty ticker: %r", entry)
        return None

    name = entry.get("name")
    name = str(name).strip() if name else None
    return TrackedTicker(symbol=symbol, company_name=name or None)


@dataclass
class WatchList:
    """Subscribed feed URLs and tracked tickers."""

    feeds: List[str] = field(default_factory=list)
    tickers: List[TrackedTicker] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WatchList":
        """Build from the stored JSON shape.

        Raises:
            StorageError: If the top-level shape is wrong.
        """
        if not isinstance(data, dict):
            raise StorageError("Watch list must be a JSON object")

        feeds = data.get("feeds") or []
        investments = data.get("investments") or []
        if not isinstance(feeds, list) or not isinstance(investments, list):
            raise StorageError("'feeds' and 'investments' must be lists")

        watchlist = cls(feeds=[str(f) for f in feeds if str(f).strip()])
        for entry in investments:
            ticker = _parse_ticker(entry)
            if ticker is not None and watchlist.find_ticker(ticker.symbol) is None:
                watchlist.tickers.append(ticker)
        return watchlist

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feeds": list(self.feeds),
            "investments": [
                {"ticker": t.symbol, "name": t.company_name} for t in self.tickers
            ],
        }

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "WatchList":
        """Load the watch list; a missing file gives an empty list.

        Raises:
            StorageError: If the file cannot be read or is not valid JSON.
        """
        if path is None:
            path = get_config().storage.watchlist_path

        if not path.exists():
            logger.debug("No watch list at %s, starting empty", path)
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid watch list {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read watch list {path}: {e}") from e

        return cls.from_dict(data)

    def save(self, path: Optional[Path] = None) -> Path:
        """Write the watch list, creating parent directories.

        Raises:
            StorageError: If the file cannot be written.
        """
        if path is None:
            path = get_config().storage.watchlist_path

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
                f.write("\n")
        except OSError as e:
            raise StorageError(f"Cannot write watch list {path}: {e}") from e

        logger.info("Saved watch list to %s", path)
        return path

    def add_feed(self, url: str) -> bool:
        """Subscribe to a feed. Returns False if already subscribed."""
        url = url.strip()
        if not url or url in self.feeds:
            return False
        self.feeds.append(url)
        return True

    def remove_feed(self, url: str) -> bool:
        """Unsubscribe from a feed. Returns False if not subscribed."""
        url = url.strip()
        if url not in self.feeds:
            return False
        self.feeds.remove(url)
        return True

    def find_ticker(self, symbol: str) -> Optional[TrackedTicker]:
        symbol = normalize_symbol(symbol)
        for ticker in self.tickers:
            if ticker.symbol == symbol:
                return ticker
        return None

    def add_ticker(self, symbol: str, company_name: Optional[str] = None) -> bool:
        """Track a ticker. Returns False if already tracked.

        Raises:
            StorageError: If the symbol is blank.
        """
        normalized = normalize_symbol(symbol)
        if not normalized:
            raise StorageError("Ticker symbol must not be empty")
        if self.find_ticker(normalized) is not None:
            return False

        name = company_name.strip() if company_name else None
        self.tickers.append(TrackedTicker(symbol=normalized, company_name=name or None))
        return True

    def remove_ticker(self, symbol: str) -> bool:
        """Stop tracking a ticker. Returns False if not tracked."""
        ticker = self.find_ticker(symbol)
        if ticker is None:
            return False
        self.tickers.remove(ticker)
        return True
