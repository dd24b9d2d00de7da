"""Pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import datetime, timezone
from pathlib import Path

import pytest

from feedwatch.config import reset_config
from feedwatch.logging_setup import reset_logging
from feedwatch.models import FeedArticle, TrackedTicker


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """Reset global state before each test."""
    reset_config()
    reset_logging()
    yield
    reset_config()
    reset_logging()


@pytest.fixture
def watchlist_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the watch list at a temporary file."""
    path = tmp_path / "feedwatch" / "config.json"
    monkeypatch.setenv("FEEDWATCH_CONFIG_PATH", str(path))
    reset_config()
    return path


@pytest.fixture
def tracked_tickers() -> list[TrackedTicker]:
    return [TrackedTicker("AAPL", company_name="Apple"), TrackedTicker("TSLA")]


@pytest.fixture
def sample_articles() -> list[FeedArticle]:
    """Two Apple stories (one upbeat, one not) around an unrelated one."""
    return [
        FeedArticle(
            title="Apple posts record profit as shares surge",
            summary="Quarterly results beat expectations.",
            link="https://news.example.com/apple-profit",
            published=datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc),
            source="https://news.example.com/rss",
        ),
        FeedArticle(
            title="Markets wrap: stocks close mixed",
            summary="Investors await the Fed decision.",
            link="https://news.example.com/markets-wrap",
            published=datetime(2024, 1, 15, 21, 0, tzinfo=timezone.utc),
            source="https://news.example.com/rss",
        ),
        FeedArticle(
            title="AAPL faces lawsuit over battery claims",
            summary="Shares decline in early trading.",
            link="https://news.example.com/aapl-lawsuit",
            published=datetime(2024, 1, 16, 9, 0, tzinfo=timezone.utc),
            source="https://news.example.com/rss",
        ),
    ]
