"""Configuration management for feedwatch.

Loads configuration from environment variables with sane defaults.
Uses python-dotenv to load from .env file if present.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_USER_AGENT = "feedwatch/0.3 (RSS News Scanner)"
DEFAULT_QUOTE_BASE_URL = "https://query1.finance.yahoo.com/v8/finance/chart"


def _get_env_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get int from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_env_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.getenv(key, default)


def _default_watchlist_path() -> Path:
    return Path.home() / ".config" / "feedwatch" / "config.json"


@dataclass(frozen=True)
class StorageConfig:
    """Watch list storage configuration."""

    watchlist_path: Path

    @classmethod
    def from_env(cls) -> "StorageConfig":
        """Create StorageConfig from environment variables."""
        raw = _get_env_str("FEEDWATCH_CONFIG_PATH", "")
        path = Path(raw).expanduser() if raw else _default_watchlist_path()
        return cls(watchlist_path=path)


@dataclass(frozen=True)
class LoggingConfig:
    """Logging-related configuration."""

    level: str
    format: str

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create LoggingConfig from environment variables."""
        return cls(
            level=_get_env_str("LOG_LEVEL", "WARNING"),
            format=_get_env_str("LOG_FORMAT", "simple"),
        )


@dataclass(frozen=True)
class FeedConfig:
    """Feed fetching configuration."""

    timeout: float
    max_articles: int
    user_agent: str

    @classmethod
    def from_env(cls) -> "FeedConfig":
        """Create FeedConfig from environment variables."""
        return cls(
            timeout=_get_env_float("FEED_TIMEOUT", 15.0),
            max_articles=_get_env_int("FEED_MAX_ARTICLES", 10),
            user_agent=_get_env_str("FEED_USER_AGENT", DEFAULT_USER_AGENT),
        )


@dataclass(frozen=True)
class QuoteConfig:
    """Stock quote API configuration."""

    base_url: str
    timeout: float
    history_days: int

    @classmethod
    def from_env(cls) -> "QuoteConfig":
        """Create QuoteConfig from environment variables."""
        return cls(
            base_url=_get_env_str("QUOTE_BASE_URL", DEFAULT_QUOTE_BASE_URL).rstrip("/"),
            timeout=_get_env_float("QUOTE_TIMEOUT", 10.0),
            history_days=_get_env_int("QUOTE_HISTORY_DAYS", 30),
        )


@dataclass(frozen=True)
class AnalysisConfig:
    """Sentiment lexicon and report rendering configuration."""

    lexicon_path: Path | None
    max_links: int

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Create AnalysisConfig from environment variables."""
        raw = _get_env_str("LEXICON_PATH", "")
        return cls(
            lexicon_path=Path(raw).expanduser() if raw else None,
            max_links=_get_env_int("REPORT_MAX_LINKS", 3),
        )


@dataclass(frozen=True)
class Config:
    """Main configuration container."""

    storage: StorageConfig
    logging: LoggingConfig
    feeds: FeedConfig
    quotes: QuoteConfig
    analysis: AnalysisConfig

    @classmethod
    def from_env(cls) -> "Config":
        """Create Config from environment variables."""
        return cls(
            storage=StorageConfig.from_env(),
            logging=LoggingConfig.from_env(),
            feeds=FeedConfig.from_env(),
            quotes=QuoteConfig.from_env(),
            analysis=AnalysisConfig.from_env(),
        )


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
