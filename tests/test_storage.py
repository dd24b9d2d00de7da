"""Tests for watch list persistence."""

import json
from pathlib import Path

import pytest

from feedwatch.models import TrackedTicker
from feedwatch.storage import StorageError, WatchList


class TestWatchListEdits:
    """Tests for in-memory edits."""

    def test_add_feed_once(self):
        wl = WatchList()
        assert wl.add_feed("https://a/rss")
        assert not wl.add_feed("https://a/rss")
        assert wl.feeds == ["https://a/rss"]

    def test_remove_feed(self):
        wl = WatchList(feeds=["https://a/rss"])
        assert wl.remove_feed("https://a/rss")
        assert not wl.remove_feed("https://a/rss")

    def test_add_ticker_uppercases(self):
        wl = WatchList()
        assert wl.add_ticker(" aapl ", "Apple")
        assert wl.tickers == [TrackedTicker("AAPL", "Apple")]

    def test_add_ticker_duplicate(self):
        wl = WatchList()
        wl.add_ticker("AAPL")
        assert not wl.add_ticker("aapl", "Apple Inc")
        assert len(wl.tickers) == 1

    def test_add_blank_ticker_rejected(self):
        with pytest.raises(StorageError):
            WatchList().add_ticker("   ")

    def test_remove_ticker_case_insensitive(self):
        wl = WatchList()
        wl.add_ticker("TSLA")
        assert wl.remove_ticker("tsla")
        assert not wl.remove_ticker("TSLA")

    def test_find_ticker(self):
        wl = WatchList()
        wl.add_ticker("MSFT", "Microsoft")
        assert wl.find_ticker("msft").company_name == "Microsoft"
        assert wl.find_ticker("AAPL") is None


class TestWatchListFile:
    """Tests for load/save."""

    def test_missing_file_is_empty(self, tmp_path: Path):
        wl = WatchList.load(tmp_path / "nope.json")
        assert wl.feeds == []
        assert wl.tickers == []

    def test_round_trip_file_format(self, tmp_path: Path):
        path = tmp_path / "nested" / "config.json"
        wl = WatchList()
        wl.add_feed("https://a/rss")
        wl.add_ticker("AAPL", "Apple")
        wl.add_ticker("TSLA")

        wl.save(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {
            "feeds": ["https://a/rss"],
            "investments": [
                {"ticker": "AAPL", "name": "Apple"},
                {"ticker": "TSLA", "name": None},
            ],
        }
        assert WatchList.load(path) == wl

    def test_default_path_from_env(self, watchlist_path: Path):
        WatchList(feeds=["https://a/rss"]).save()
        assert watchlist_path.exists()
        assert WatchList.load().feeds == ["https://a/rss"]

    def test_missing_investments_key(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text('{"feeds": ["https://a/rss"]}', encoding="utf-8")
        assert WatchList.load(path).tickers == []

    def test_blank_and_duplicate_tickers_dropped_on_load(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "feeds": [],
                    "investments": [
                        {"ticker": "", "name": "Ghost"},
                        {"ticker": "aapl", "name": "Apple"},
                        {"ticker": "AAPL"},
                        "garbage",
                    ],
                }
            ),
            encoding="utf-8",
        )

        wl = WatchList.load(path)

        assert wl.tickers == [TrackedTicker("AAPL", "Apple")]

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError):
            WatchList.load(path)

    def test_wrong_shape(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text('{"feeds": "https://a/rss"}', encoding="utf-8")
        with pytest.raises(StorageError):
            WatchList.load(path)
