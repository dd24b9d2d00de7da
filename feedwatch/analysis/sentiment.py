"""Keyword sentiment classification.

Counts whole-word hits of positive and negative keywords and labels the
text by whichever side has more hits. The keyword lists are data: the
default set ships as ``lexicon.yaml`` next to this module and any other
mapping of category to keywords can be loaded or merged in.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, FrozenSet, Iterable, Mapping, Optional

import yaml

from feedwatch.analysis.text import count_term
from feedwatch.logging_setup import get_logger
from feedwatch.models import NEUTRAL_SCORE, Sentiment, SentimentScore

logger = get_logger("analysis.sentiment")

# Module directory for loading lexicon.yaml
MODULE_DIR = Path(__file__).parent
DEFAULT_LEXICON_PATH = MODULE_DIR / "lexicon.yaml"

CATEGORIES = ("positive", "negative")


class LexiconError(Exception):
    """Raised when a sentiment lexicon is malformed."""

    pass


def _normalize_keywords(category: str, keywords: Any) -> FrozenSet[str]:
    if keywords is None:
        return frozenset()
    if isinstance(keywords, str) or not isinstance(keywords, Iterable):
        raise LexiconError(f"Keywords for '{category}' must be a list of strings")

    normalized = set()
    for keyword in keywords:
        if not isinstance(keyword, str):
            raise LexiconError(f"Keyword {keyword!r} in '{category}' is not a string")
        keyword = " ".join(keyword.lower().split())
        if keyword:
            normalized.add(keyword)
    return frozenset(normalized)


@dataclass(frozen=True)
class Lexicon:
    """Positive and negative keyword sets."""

    positive: FrozenSet[str] = frozenset()
    negative: FrozenSet[str] = frozenset()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Lexicon":
        """Build a lexicon from a ``{category: [keywords]}`` mapping.

        Raises:
            LexiconError: If the mapping has an unknown category or a
                category's keywords are not a list of strings.
        """
        if not isinstance(mapping, Mapping):
            raise LexiconError("Lexicon must be a mapping of category to keywords")

        unknown = set(mapping) - set(CATEGORIES)
        if unknown:
            raise LexiconError(
                f"Unknown lexicon categories {sorted(unknown)}. Must be one of: {CATEGORIES}"
            )

        return cls(
            positive=_normalize_keywords("positive", mapping.get("positive")),
            negative=_normalize_keywords("negative", mapping.get("negative")),
        )

    def extend(self, mapping: Mapping[str, Any]) -> "Lexicon":
        """Return a new lexicon with the mapping's keywords added."""
        extra = Lexicon.from_mapping(mapping)
        return Lexicon(
            positive=self.positive | extra.positive,
            negative=self.negative | extra.negative,
        )

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "positive": sorted(self.positive),
            "negative": sorted(self.negative),
        }


def load_lexicon(path: Path) -> Lexicon:
    """Load a lexicon from a YAML (or JSON) file.

    Args:
        path: File holding a ``{positive: [...], negative: [...]}`` mapping.

    Returns:
        Parsed lexicon.

    Raises:
        FileNotFoundError: If the file does not exist.
        LexiconError: If the file is not valid YAML or has the wrong shape.
    """
    if not path.exists():
        raise FileNotFoundError(f"Lexicon file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise LexiconError(f"Invalid lexicon file {path}: {e}") from e

    lexicon = Lexicon.from_mapping(data or {})
    logger.debug(
        "Loaded lexicon from %s (%d positive, %d negative)",
        path,
        len(lexicon.positive),
        len(lexicon.negative),
    )
    return lexicon


# Preload the packaged lexicon at module load
DEFAULT_LEXICON: Lexicon = load_lexicon(DEFAULT_LEXICON_PATH)


def _count_hits(text: str, keywords: Iterable[str]) -> int:
    return sum(count_term(text, keyword) for keyword in keywords)


def classify(text: Optional[str], lexicon: Optional[Lexicon] = None) -> SentimentScore:
    """Classify text by keyword hits.

    Every whole-word occurrence of a keyword counts as one hit, so
    "lossless" is not a hit for "loss" but "loss ... loss" is two.

    Args:
        text: Text to classify. Empty or None classifies as Neutral.
        lexicon: Keyword sets to use. Defaults to the packaged lexicon.

    Returns:
        Positive if positive hits outnumber negative hits, Negative if the
        reverse, Neutral otherwise. Intensity is positive minus negative hits.
    """
    if lexicon is None:
        lexicon = DEFAULT_LEXICON

    if not text:
        return NEUTRAL_SCORE

    pos_count = _count_hits(text, lexicon.positive)
    neg_count = _count_hits(text, lexicon.negative)

    if pos_count > neg_count:
        label = Sentiment.POSITIVE
    elif neg_count > pos_count:
        label = Sentiment.NEGATIVE
    else:
        label = Sentiment.NEUTRAL

    return SentimentScore(
        label=label,
        intensity=pos_count - neg_count,
        positive_hits=pos_count,
        negative_hits=neg_count,
    )
