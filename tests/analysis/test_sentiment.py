"""Tests for keyword sentiment classification."""

from pathlib import Path

import pytest

from feedwatch.analysis.sentiment import (
    DEFAULT_LEXICON,
    Lexicon,
    LexiconError,
    classify,
    load_lexicon,
)
from feedwatch.models import NEUTRAL_SCORE, Sentiment, SentimentScore


class TestClassify:
    """Tests for classify()."""

    def test_empty_text_is_neutral(self):
        assert classify("") == SentimentScore(label=Sentiment.NEUTRAL, intensity=0)
        assert classify(None).label is Sentiment.NEUTRAL

    def test_empty_text_returns_shared_neutral_score(self):
        assert classify("") is NEUTRAL_SCORE
        assert classify(None) is NEUTRAL_SCORE

    def test_positive_text(self):
        score = classify("strong growth and profit beat")
        assert score.label is Sentiment.POSITIVE
        assert score.intensity == 3
        assert score.positive_hits == 3
        assert score.negative_hits == 0

    def test_negative_text(self):
        score = classify("massive loss and downgrade")
        assert score.label is Sentiment.NEGATIVE
        assert score.intensity == -2

    def test_tie_is_neutral(self):
        score = classify("growth amid loss")
        assert score.label is Sentiment.NEUTRAL
        assert score.intensity == 0

    def test_no_keywords_is_neutral(self):
        score = classify("The company announced a new product today")
        assert score == SentimentScore(label=Sentiment.NEUTRAL, intensity=0)

    def test_whole_word_policy(self):
        """"lossless" is not a hit for "loss"."""
        assert classify("lossless audio codec").intensity == 0

    def test_case_insensitive(self):
        assert classify("PROFIT SURGE").intensity == 2

    def test_repeated_keyword_counts_each_time(self):
        assert classify("loss, loss and more loss").intensity == -3

    def test_deterministic(self):
        text = "Shares surge on upgrade despite lawsuit"
        assert classify(text) == classify(text)

    def test_custom_lexicon(self):
        lexicon = Lexicon.from_mapping({"positive": ["moon"], "negative": ["rug pull"]})
        assert classify("to the moon", lexicon).label is Sentiment.POSITIVE
        assert classify("a classic rug  pull", lexicon).label is Sentiment.NEGATIVE
        assert classify("profit", lexicon).label is Sentiment.NEUTRAL


class TestLexicon:
    """Tests for lexicon loading and extension."""

    def test_default_lexicon_has_both_categories(self):
        assert "growth" in DEFAULT_LEXICON.positive
        assert "lawsuit" in DEFAULT_LEXICON.negative
        assert not DEFAULT_LEXICON.positive & DEFAULT_LEXICON.negative

    def test_from_mapping_normalizes(self):
        lexicon = Lexicon.from_mapping({"positive": ["  Beat ", "", "RALLY"]})
        assert lexicon.positive == frozenset({"beat", "rally"})
        assert lexicon.negative == frozenset()

    def test_unknown_category_rejected(self):
        with pytest.raises(LexiconError):
            Lexicon.from_mapping({"bullish": ["moon"]})

    def test_string_instead_of_list_rejected(self):
        with pytest.raises(LexiconError):
            Lexicon.from_mapping({"positive": "growth"})

    def test_non_string_keyword_rejected(self):
        with pytest.raises(LexiconError):
            Lexicon.from_mapping({"negative": ["loss", 3]})

    def test_extend_returns_new_lexicon(self):
        extended = DEFAULT_LEXICON.extend({"positive": ["buyback"]})
        assert "buyback" in extended.positive
        assert "buyback" not in DEFAULT_LEXICON.positive
        assert classify("buyback announced", extended).label is Sentiment.POSITIVE

    def test_load_lexicon_from_yaml(self, tmp_path: Path):
        path = tmp_path / "lexicon.yaml"
        path.write_text("positive: [moon]\nnegative: [dump]\n", encoding="utf-8")

        lexicon = load_lexicon(path)

        assert lexicon.to_dict() == {"positive": ["moon"], "negative": ["dump"]}

    def test_load_lexicon_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_lexicon(tmp_path / "missing.yaml")

    def test_load_lexicon_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("positive: [unclosed\n", encoding="utf-8")
        with pytest.raises(LexiconError):
            load_lexicon(path)
