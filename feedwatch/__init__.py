"""feedwatch - RSS news scanner for tracked investments.

Fetches RSS/Atom feeds, finds articles mentioning tracked tickers,
and scores their sentiment with a keyword lexicon.
"""

__version__ = "0.3.0"
