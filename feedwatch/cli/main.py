"""feedwatch command-line interface.

Subcommands:

- ``add`` / ``remove`` / ``list``: manage subscribed feeds
- ``fetch``: show recent articles
- ``stock``: manage tracked tickers and look up quotes
- ``scan``: find tracked tickers in the news and summarize sentiment
- ``analyze``: line up one ticker's news with its recent prices

All analysis lives in ``feedwatch.analysis``; this module only loads the
watch list, fetches data and prints results.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence

from feedwatch import __version__
from feedwatch.analysis.correlate import correlate
from feedwatch.analysis.pipeline import run_scan, score_matches
from feedwatch.analysis.matcher import find_matches
from feedwatch.analysis.reporter import write_reports_csv
from feedwatch.analysis.sentiment import DEFAULT_LEXICON, Lexicon, LexiconError, load_lexicon
from feedwatch.cli._console import configure_windows_console, sentiment_mark
from feedwatch.config import get_config
from feedwatch.feeds.pull import FeedError, fetch_articles, fetch_feed
from feedwatch.logging_setup import get_logger, setup_logging
from feedwatch.models import FeedArticle, TickerReport
from feedwatch.quotes import QuoteError, fetch_history, fetch_quote
from feedwatch.storage import StorageError, WatchList, normalize_symbol

logger = get_logger("cli.main")

NO_FEEDS_HINT = "No feeds subscribed. Use 'feedwatch add <url>' to add a feed."
NO_TICKERS_HINT = "No investments tracked. Use 'feedwatch stock add <ticker>' to add one."
DATE_FORMAT = "%Y-%m-%d %H:%M"


def _fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    sys.exit(1)


def _load_watchlist() -> WatchList:
    try:
        return WatchList.load()
    except StorageError as e:
        _fail(f"Error loading config: {e}")


def _save_watchlist(watchlist: WatchList) -> None:
    try:
        watchlist.save()
    except StorageError as e:
        _fail(f"Error saving config: {e}")


def _resolve_lexicon() -> Lexicon:
    """Packaged lexicon, or the file named by LEXICON_PATH."""
    path = get_config().analysis.lexicon_path
    if path is None:
        return DEFAULT_LEXICON
    try:
        return load_lexicon(path)
    except (FileNotFoundError, LexiconError) as e:
        _fail(f"Error loading lexicon: {e}")


def _use_emoji(args: argparse.Namespace) -> Optional[bool]:
    return False if getattr(args, "no_emoji", False) else None


def _format_date(article: FeedArticle, default: str = "No date") -> str:
    if article.published is None:
        return default
    return article.published.strftime(DATE_FORMAT)


# ---------------------------- Feed Commands ---------------------------- #


def cmd_add(args: argparse.Namespace) -> None:
    """Subscribe to a feed."""
    watchlist = _load_watchlist()
    if watchlist.add_feed(args.url):
        _save_watchlist(watchlist)
        print(f"Added feed: {args.url}")
    else:
        print(f"Feed already exists: {args.url}")


def cmd_remove(args: argparse.Namespace) -> None:
    """Unsubscribe from a feed."""
    watchlist = _load_watchlist()
    if watchlist.remove_feed(args.url):
        _save_watchlist(watchlist)
        print(f"Removed feed: {args.url}")
    else:
        print(f"Feed not found: {args.url}")


def cmd_list(args: argparse.Namespace) -> None:
    """List subscribed feeds."""
    watchlist = _load_watchlist()
    if not watchlist.feeds:
        print(NO_FEEDS_HINT)
        return

    print("Subscribed feeds:")
    for i, url in enumerate(watchlist.feeds, 1):
        print(f"  {i}. {url}")


def cmd_fetch(args: argparse.Namespace) -> None:
    """Fetch and print recent articles."""
    if args.url:
        urls = [args.url]
    else:
        urls = _load_watchlist().feeds
        if not urls:
            print(NO_FEEDS_HINT)
            return

    for url in urls:
        print(f"\nFetching: {url}")
        try:
            result = fetch_feed(url)
        except FeedError as e:
            print(f"Error fetching {url}: {e}", file=sys.stderr)
            continue

        print(f"== {result.title} ==")
        if not result.articles:
            print("  No articles found.")
            continue

        for article in result.articles:
            print(f"\n  [{_format_date(article)}]")
            print(f"  {article.title}")
            if article.link:
                print(f"  {article.link}")


# ---------------------------- Stock Commands ---------------------------- #


def cmd_stock_add(args: argparse.Namespace) -> None:
    """Track a ticker."""
    watchlist = _load_watchlist()
    try:
        added = watchlist.add_ticker(args.ticker, args.name)
    except StorageError as e:
        _fail(f"Error: {e}")

    ticker = watchlist.find_ticker(args.ticker)
    if added and ticker is not None:
        _save_watchlist(watchlist)
        print(f"Added investment: {ticker.display_name}")
    else:
        print(f"Investment already tracked: {normalize_symbol(args.ticker)}")


def cmd_stock_remove(args: argparse.Namespace) -> None:
    """Stop tracking a ticker."""
    watchlist = _load_watchlist()
    symbol = normalize_symbol(args.ticker)
    if watchlist.remove_ticker(symbol):
        _save_watchlist(watchlist)
        print(f"Removed investment: {symbol}")
    else:
        print(f"Investment not found: {symbol}")


def cmd_stock_list(args: argparse.Namespace) -> None:
    """List tracked tickers."""
    watchlist = _load_watchlist()
    if not watchlist.tickers:
        print(NO_TICKERS_HINT)
        return

    print("Tracked investments:")
    for i, ticker in enumerate(watchlist.tickers, 1):
        print(f"  {i}. {ticker.display_name}")


def cmd_stock_quote(args: argparse.Namespace) -> None:
    """Print the current quote for a ticker."""
    symbol = normalize_symbol(args.ticker)
    print(f"Fetching quote for {symbol}...")
    try:
        quote = fetch_quote(symbol)
    except QuoteError as e:
        _fail(f"Error fetching quote: {e}")

    sign = "+" if quote.change >= 0 else ""
    print(
        f"\n{quote.ticker}: ${quote.price:.2f} "
        f"({sign}{quote.change:.2f}, {sign}{quote.change_percent:.2f}%)"
    )


# ---------------------------- Scan Command ---------------------------- #


def _print_report(report: TickerReport, max_links: int) -> None:
    name = f" ({report.company_name})" if report.company_name else ""
    if report.total_matches == 0:
        print(f"  {report.symbol}{name}: no news")
        return

    print(
        f"  {report.symbol}{name}: {report.total_matches} articles | "
        f"+{report.positive} / -{report.negative} / ~{report.neutral} | "
        f"net {report.net_intensity:+d}"
    )
    for link in report.links[:max_links]:
        print(f"      {link}")


def cmd_scan(args: argparse.Namespace) -> None:
    """Scan all feeds for tracked tickers and summarize sentiment."""
    watchlist = _load_watchlist()

    if not watchlist.tickers:
        print(NO_TICKERS_HINT)
        return
    if not watchlist.feeds:
        print(NO_FEEDS_HINT)
        return

    lexicon = _resolve_lexicon()
    use_emoji = _use_emoji(args)

    print("Scanning feeds for investment mentions...\n")

    articles: List[FeedArticle] = []
    for url in watchlist.feeds:
        try:
            articles.extend(fetch_feed(url).articles)
        except FeedError as e:
            print(f"Error fetching {url}: {e}", file=sys.stderr)

    result = run_scan(articles, watchlist.tickers, lexicon)

    if result.matches:
        print(f"Found {len(result.matches)} mentions:\n")
        for match in result.matches:
            mark = sentiment_mark(result.scores[match].label, use_emoji)
            print(
                f"[{match.ticker.symbol}] {mark} "
                f"[{_format_date(match.article)}] {match.article.title}"
            )
            if match.article.link:
                print(f"    {match.article.link}")
    else:
        print("No mentions found for tracked investments.")

    print("\nSummary by ticker:")
    max_links = get_config().analysis.max_links
    for report in result.reports:
        _print_report(report, max_links)

    if args.csv:
        output_csv = Path(args.csv)
        output_png = output_csv.with_suffix(".png") if args.png else None
        write_reports_csv(result.reports, output_csv, output_png)
        print(f"\nWrote report for {len(result.reports)} tickers to {output_csv}")


# ---------------------------- Analyze Command ---------------------------- #


def cmd_analyze(args: argparse.Namespace) -> None:
    """Show recent prices and news/price correlation for one ticker."""
    watchlist = _load_watchlist()
    symbol = normalize_symbol(args.ticker)

    ticker = watchlist.find_ticker(symbol)
    if ticker is None:
        print(
            f"Ticker {symbol} is not being tracked. "
            f"Use 'feedwatch stock add {symbol}' first."
        )
        return

    lexicon = _resolve_lexicon()
    use_emoji = _use_emoji(args)

    print(f"Analyzing {symbol} ...\n")

    print("Fetching price history...")
    try:
        prices = fetch_history(symbol, args.days).prices
        print(f"Got {len(prices)} days of price data.\n")
    except QuoteError as e:
        print(f"Error fetching price history: {e}", file=sys.stderr)
        prices = []

    if prices:
        print("Recent prices:")
        for price in prices[-5:]:
            print(f"  {price.date}: ${price.close:.2f}")
        print()

    if not watchlist.feeds:
        print("No feeds to scan. Add some feeds with 'feedwatch add <url>'.")
        return

    print("Scanning feeds for mentions...")
    articles = fetch_articles(watchlist.feeds)
    matches = find_matches(articles, [ticker])

    if not matches:
        print(f"No recent news mentions found for {symbol}.")
        return

    print(f"Found {len(matches)} mentions.\n")

    scores = score_matches(matches, lexicon)
    correlations = correlate(matches, scores, prices)

    print("News & Price Correlation:")
    print("-" * 80)
    for corr in correlations:
        if corr.price is not None and corr.price_change is not None:
            sign = "+" if corr.price_change >= 0 else ""
            price_str = f"${corr.price:.2f} ({sign}{corr.price_change:.1f}%)"
        elif corr.price is not None:
            price_str = f"${corr.price:.2f}"
        else:
            price_str = "N/A"

        mark = sentiment_mark(corr.sentiment, use_emoji)
        print(
            f"[{corr.date or 'No date'}] {mark} {corr.sentiment.value:<8} | "
            f"{price_str} | {corr.article_title}"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feedwatch",
        description="RSS reader that scans news for tracked investments",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--no-emoji",
        action="store_true",
        help="Use ASCII sentiment markers",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # -------------------- Feed Commands --------------------

    add_p = subparsers.add_parser("add", help="Add a new feed URL")
    add_p.add_argument("url", help="Feed URL")
    add_p.set_defaults(func=cmd_add)

    remove_p = subparsers.add_parser("remove", help="Remove a feed URL")
    remove_p.add_argument("url", help="Feed URL")
    remove_p.set_defaults(func=cmd_remove)

    list_p = subparsers.add_parser("list", help="List all subscribed feeds")
    list_p.set_defaults(func=cmd_list)

    fetch_p = subparsers.add_parser("fetch", help="Fetch and display recent articles")
    fetch_p.add_argument(
        "url",
        nargs="?",
        default=None,
        help="Fetch from this feed URL only",
    )
    fetch_p.set_defaults(func=cmd_fetch)

    # -------------------- Stock Commands --------------------

    stock_p = subparsers.add_parser("stock", help="Manage tracked stock investments")
    stock_sub = stock_p.add_subparsers(dest="action", required=True)

    stock_add_p = stock_sub.add_parser("add", help="Add a stock ticker to track")
    stock_add_p.add_argument("ticker", help="Ticker symbol")
    stock_add_p.add_argument(
        "-n", "--name",
        default=None,
        help="Company name for better matching",
    )
    stock_add_p.set_defaults(func=cmd_stock_add)

    stock_remove_p = stock_sub.add_parser("remove", help="Remove a tracked ticker")
    stock_remove_p.add_argument("ticker", help="Ticker symbol")
    stock_remove_p.set_defaults(func=cmd_stock_remove)

    stock_list_p = stock_sub.add_parser("list", help="List all tracked investments")
    stock_list_p.set_defaults(func=cmd_stock_list)

    stock_quote_p = stock_sub.add_parser("quote", help="Get current quote for a ticker")
    stock_quote_p.add_argument("ticker", help="Ticker symbol")
    stock_quote_p.set_defaults(func=cmd_stock_quote)

    # -------------------- Analysis Commands --------------------

    scan_p = subparsers.add_parser("scan", help="Scan feeds for mentions of tracked investments")
    scan_p.add_argument(
        "--csv",
        default=None,
        help="Also write per-ticker report to this CSV path",
    )
    scan_p.add_argument(
        "--png",
        action="store_true",
        help="Also generate PNG chart next to the CSV (requires --csv)",
    )
    scan_p.set_defaults(func=cmd_scan)

    analyze_p = subparsers.add_parser(
        "analyze",
        help="Analyze news and price correlation for a ticker",
    )
    analyze_p.add_argument("ticker", help="Ticker symbol")
    analyze_p.add_argument(
        "--days",
        type=int,
        default=None,
        help="Days of price history (default: QUOTE_HISTORY_DAYS)",
    )
    analyze_p.set_defaults(func=cmd_analyze)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    configure_windows_console()
    setup_logging()

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "scan" and args.png and not args.csv:
        parser.error("scan: --png requires --csv")
    args.func(args)


if __name__ == "__main__":
    main()
