"""Tests for ticker matching."""

from feedwatch.analysis.matcher import find_matches, mentions_ticker
from feedwatch.models import FeedArticle, Match, TrackedTicker


class TestMentionsTicker:
    """Tests for single article/ticker matching."""

    def test_symbol_match(self):
        assert mentions_ticker("TSLA deliveries beat", TrackedTicker("TSLA"))

    def test_symbol_inside_word_no_match(self):
        assert not mentions_ticker("CAT earnings today", TrackedTicker("A"))

    def test_company_name_substring(self):
        ticker = TrackedTicker("AAPL", company_name="Apple")
        assert mentions_ticker("apple's new headset", ticker)

    def test_empty_company_name_ignored(self):
        ticker = TrackedTicker("ZZZZ", company_name="")
        assert not mentions_ticker("Nothing relevant here", ticker)

    def test_blank_symbol_never_matches(self):
        assert not mentions_ticker("Apple news", TrackedTicker("  ", company_name="Apple"))


class TestFindMatches:
    """Tests for batch matching."""

    def test_matches_title_and_summary(self, sample_articles, tracked_tickers):
        matches = find_matches(sample_articles, tracked_tickers)

        assert [m.article.link for m in matches] == [
            "https://news.example.com/apple-profit",
            "https://news.example.com/aapl-lawsuit",
        ]
        assert all(m.ticker.symbol == "AAPL" for m in matches)

    def test_summary_only_mention(self):
        article = FeedArticle(title="Morning briefing", summary="TSLA rallies pre-market")
        matches = find_matches([article], [TrackedTicker("TSLA")])
        assert matches == [Match(article=article, ticker=TrackedTicker("TSLA"))]

    def test_article_matches_multiple_tickers_in_ticker_order(self):
        article = FeedArticle(title="TSLA and AAPL lead tech rally")
        tickers = [TrackedTicker("AAPL"), TrackedTicker("MSFT"), TrackedTicker("TSLA")]

        matches = find_matches([article], tickers)

        assert [m.ticker.symbol for m in matches] == ["AAPL", "TSLA"]

    def test_order_is_article_then_ticker(self):
        first = FeedArticle(title="TSLA and AAPL")
        second = FeedArticle(title="AAPL only")
        tickers = [TrackedTicker("AAPL"), TrackedTicker("TSLA")]

        matches = find_matches([first, second], tickers)

        assert [(m.article.title, m.ticker.symbol) for m in matches] == [
            ("TSLA and AAPL", "AAPL"),
            ("TSLA and AAPL", "TSLA"),
            ("AAPL only", "AAPL"),
        ]

    def test_invalid_ticker_skipped(self):
        article = FeedArticle(title="AAPL up")
        matches = find_matches([article], [TrackedTicker(""), TrackedTicker("AAPL")])
        assert len(matches) == 1

    def test_no_articles(self, tracked_tickers):
        assert find_matches([], tracked_tickers) == []

    def test_accepts_generators(self):
        articles = (FeedArticle(title=t) for t in ["AAPL", "TSLA"])
        tickers = (t for t in [TrackedTicker("AAPL"), TrackedTicker("TSLA")])
        assert len(find_matches(articles, tickers)) == 2
