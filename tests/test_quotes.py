"""Tests for the Yahoo Finance quote client (network is stubbed)."""

import io
import json
from urllib.error import URLError

import pytest

from feedwatch import quotes
from feedwatch.quotes import (
    QuoteError,
    fetch_history,
    fetch_quote,
    history_range,
    parse_history,
    parse_quote,
)

QUOTE_PAYLOAD = {
    "chart": {
        "result": [{"meta": {"regularMarketPrice": 190.0, "previousClose": 200.0}}],
        "error": None,
    }
}

HISTORY_PAYLOAD = {
    "chart": {
        "result": [
            {
                "meta": {},
                # 2024-01-12, 2024-01-15, 2024-01-16 at 14:30 UTC
                "timestamp": [1705069800, 1705329000, 1705415400],
                "indicators": {"quote": [{"close": [185.5, None, 183.25]}]},
            }
        ],
        "error": None,
    }
}


class FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


@pytest.fixture
def served(monkeypatch):
    """Record requested URLs and answer with the queued payload."""
    calls = []
    state = {"payload": QUOTE_PAYLOAD}

    def _urlopen(req, timeout=None):
        calls.append(req.full_url)
        payload = state["payload"]
        if isinstance(payload, Exception):
            raise payload
        return FakeResponse(json.dumps(payload).encode("utf-8"))

    monkeypatch.setattr(quotes, "urlopen", _urlopen)
    return state, calls


class TestHistoryRange:
    """Tests for day count to range mapping."""

    @pytest.mark.parametrize(
        "days,expected",
        [(1, "5d"), (5, "5d"), (6, "1mo"), (30, "1mo"), (31, "3mo"), (90, "3mo"), (91, "6mo")],
    )
    def test_ranges(self, days, expected):
        assert history_range(days) == expected


class TestParseQuote:
    """Tests for quote payload parsing."""

    def test_change_vs_previous_close(self):
        quote = parse_quote(QUOTE_PAYLOAD, "aapl", today="2024-01-16")

        assert quote.ticker == "AAPL"
        assert quote.price == pytest.approx(190.0)
        assert quote.change == pytest.approx(-10.0)
        assert quote.change_percent == pytest.approx(-5.0)
        assert quote.date == "2024-01-16"

    def test_missing_previous_close(self):
        payload = {"chart": {"result": [{"meta": {"regularMarketPrice": 50.0}}]}}
        quote = parse_quote(payload, "X")
        assert quote.change == 0.0
        assert quote.change_percent == 0.0

    def test_api_error(self):
        payload = {"chart": {"result": None, "error": {"description": "No data found"}}}
        with pytest.raises(QuoteError, match="No data found"):
            parse_quote(payload, "NOPE")

    def test_empty_result(self):
        with pytest.raises(QuoteError):
            parse_quote({"chart": {"result": []}}, "NOPE")


class TestParseHistory:
    """Tests for history payload parsing."""

    def test_skips_null_closes(self):
        history = parse_history(HISTORY_PAYLOAD, "aapl")

        assert history.ticker == "AAPL"
        assert [p.date for p in history.prices] == ["2024-01-12", "2024-01-16"]
        assert history.prices[1].close == pytest.approx(183.25)

    def test_no_timestamps(self):
        payload = {"chart": {"result": [{"meta": {}, "indicators": {"quote": []}}]}}
        assert parse_history(payload, "X").prices == []


class TestFetch:
    """Tests for the HTTP layer."""

    def test_fetch_quote_url(self, served):
        _, calls = served
        quote = fetch_quote("aapl")

        assert quote.price == pytest.approx(190.0)
        assert calls == [
            "https://query1.finance.yahoo.com/v8/finance/chart/AAPL?range=1d&interval=1d"
        ]

    def test_fetch_history_uses_range(self, served):
        state, calls = served
        state["payload"] = HISTORY_PAYLOAD

        history = fetch_history("AAPL", days=60)

        assert len(history.prices) == 2
        assert calls[0].endswith("/AAPL?range=3mo&interval=1d")

    def test_fetch_history_default_days(self, served, monkeypatch):
        state, calls = served
        state["payload"] = HISTORY_PAYLOAD
        monkeypatch.setenv("QUOTE_HISTORY_DAYS", "5")

        fetch_history("AAPL")

        assert "range=5d" in calls[0]

    def test_network_error(self, served):
        state, _ = served
        state["payload"] = URLError("offline")
        with pytest.raises(QuoteError, match="offline"):
            fetch_quote("AAPL")
