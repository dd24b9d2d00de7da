"""Per-ticker sentiment reports.

Aggregates matches and their sentiment scores into one report per tracked
ticker and exports the reports as CSV with an optional bar chart.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd

from feedwatch.logging_setup import get_logger, log_fields
from feedwatch.models import Match, Sentiment, SentimentScore, TickerReport, TrackedTicker

logger = get_logger("analysis.reporter")

REPORT_COLUMNS = [
    "symbol",
    "company_name",
    "total_matches",
    "positive",
    "negative",
    "neutral",
    "net_intensity",
    "links",
]


def _unique_tickers(tickers: Iterable[TrackedTicker]) -> List[TrackedTicker]:
    """Valid tickers in caller order, first occurrence of each symbol kept."""
    seen: set[str] = set()
    unique: List[TrackedTicker] = []
    for ticker in tickers:
        if not ticker.is_valid or ticker.symbol in seen:
            continue
        seen.add(ticker.symbol)
        unique.append(ticker)
    return unique


def build_reports(
    matches: Iterable[Match],
    scores: Mapping[Match, SentimentScore],
    tickers: Iterable[TrackedTicker],
) -> List[TickerReport]:
    """Aggregate matches into one report per tracked ticker.

    Args:
        matches: Matches from one scan pass.
        scores: Sentiment score of each match.
        tickers: Full tracked-ticker list. Every valid ticker gets a report,
            with zero counts when nothing matched it.

    Returns:
        Reports in the order of ``tickers``.
    """
    ordered = _unique_tickers(tickers)

    counts: Dict[str, Dict[Sentiment, int]] = {
        t.symbol: {label: 0 for label in Sentiment} for t in ordered
    }
    intensity: Dict[str, int] = {t.symbol: 0 for t in ordered}
    links: Dict[str, Dict[str, None]] = {t.symbol: {} for t in ordered}

    for match in matches:
        symbol = match.ticker.symbol
        if symbol not in counts:
            logger.debug("Ignoring match for untracked ticker %s", symbol)
            continue

        score = scores[match]
        counts[symbol][score.label] += 1
        intensity[symbol] += score.intensity
        if match.article.link:
            links[symbol].setdefault(match.article.link, None)

    reports: List[TickerReport] = []
    for ticker in ordered:
        by_label = counts[ticker.symbol]
        reports.append(
            TickerReport(
                symbol=ticker.symbol,
                company_name=ticker.company_name,
                total_matches=sum(by_label.values()),
                positive=by_label[Sentiment.POSITIVE],
                negative=by_label[Sentiment.NEGATIVE],
                neutral=by_label[Sentiment.NEUTRAL],
                net_intensity=intensity[ticker.symbol],
                links=tuple(links[ticker.symbol]),
            )
        )

    return reports


def reports_to_frame(reports: Iterable[TickerReport]) -> pd.DataFrame:
    """Flatten reports into a DataFrame, links joined with spaces."""
    rows = [
        {
            "symbol": r.symbol,
            "company_name": r.company_name or "",
            "total_matches": r.total_matches,
            "positive": r.positive,
            "negative": r.negative,
            "neutral": r.neutral,
            "net_intensity": r.net_intensity,
            "links": " ".join(r.links),
        }
        for r in reports
    ]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def write_reports_csv(
    reports: Iterable[TickerReport],
    output_csv: Path,
    output_png: Optional[Path] = None,
) -> pd.DataFrame:
    """Write reports to CSV and optionally a net-intensity bar chart.

    Args:
        reports: Reports to export.
        output_csv: Path to write the CSV.
        output_png: Optional path for the chart.

    Returns:
        The exported DataFrame.
    """
    df = reports_to_frame(reports)

    output_csv.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_csv, index=False)
    log_fields(
        logger,
        logging.INFO,
        "Wrote %d ticker reports to %s",
        len(df),
        output_csv,
        path=str(output_csv),
        tickers=len(df),
        matches=int(df["total_matches"].sum()) if not df.empty else 0,
    )

    if output_png:
        _generate_report_chart(df, output_png)

    return df


def _generate_report_chart(df: pd.DataFrame, output_path: Path) -> None:
    """Generate per-ticker net intensity bar chart."""
    try:
        import matplotlib

        matplotlib.use("Agg")  # Non-interactive backend
        import matplotlib.pyplot as plt

        if df.empty:
            return

        fig, ax = plt.subplots(figsize=(10, max(4, len(df) * 0.4)))

        colors = ["#e74c3c" if x < 0 else "#27ae60" for x in df["net_intensity"]]
        bars = ax.barh(df["symbol"], df["net_intensity"], color=colors)

        for bar, total in zip(bars, df["total_matches"]):
            width = bar.get_width()
            x_pos = width + 0.1 if width >= 0 else width - 0.1
            ha = "left" if width >= 0 else "right"
            ax.text(x_pos, bar.get_y() + bar.get_height() / 2, f"{total} articles",
                    va="center", ha=ha, fontsize=9)

        ax.set_xlabel("Net Sentiment Intensity")
        ax.set_title("Tracked Ticker Sentiment")
        ax.axvline(x=0, color="black", linewidth=0.5)
        ax.invert_yaxis()

        plt.tight_layout()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(output_path, dpi=100, bbox_inches="tight")
        plt.close(fig)

        logger.info("Generated report chart: %s", output_path)

    except ImportError:
        logger.debug("matplotlib not available, skipping chart generation")
    except Exception as e:
        logger.warning("Failed to generate report chart: %s", e)
