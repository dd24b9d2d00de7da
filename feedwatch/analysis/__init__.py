"""Article analysis: ticker matching, sentiment scoring and reporting.

Modules:
    text: Word-boundary search shared by matching and scoring
    matcher: Find articles mentioning tracked tickers
    sentiment: Keyword lexicon sentiment classification
    reporter: Aggregate sentiment per tracked ticker
    pipeline: Run a full scan pass over fetched articles
    correlate: Line up matched articles with daily prices
"""

from feedwatch.analysis.matcher import find_matches
from feedwatch.analysis.sentiment import Lexicon, classify, load_lexicon
from feedwatch.analysis.reporter import build_reports, write_reports_csv
from feedwatch.analysis.pipeline import ScanResult, run_scan
from feedwatch.analysis.correlate import correlate

__all__ = [
    "find_matches",
    "Lexicon",
    "classify",
    "load_lexicon",
    "build_reports",
    "write_reports_csv",
    "ScanResult",
    "run_scan",
    "correlate",
]
