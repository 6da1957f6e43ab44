"""
Search Aggregator - Ranked search across public web APIs

Queries Wikipedia, Hacker News, Open Library and GitHub concurrently, scores
every hit on a 0-100 scale, and serves the merged list over HTTP with a
short-lived in-memory cache.

Usage:
    from search_aggregator import ResultCache, SearchAggregator, create_default_sources

    aggregator = SearchAggregator(create_default_sources(), ResultCache())
    response = await aggregator.aggregate("python web framework")

    for result in response.results:
        print(f"{result.score:5.1f}  [{result.source.value}] {result.title}")

Features:
    - Concurrent provider fan-out with per-provider failure isolation
    - Deterministic heuristic ranking (title, snippet, popularity)
    - 5-minute result cache with case/whitespace-insensitive keys
    - JSON, CSV, XML and XLSX export
"""

from .application.search import SearchAggregator, calculate_score, rank_results
from .infrastructure.cache import ResultCache
from .infrastructure.sources import create_default_sources
from .models import AggregatedResponse, CacheEntry, SearchResult, Source

__version__ = "1.0.0"

__all__ = [
    "AggregatedResponse",
    "CacheEntry",
    "ResultCache",
    "SearchAggregator",
    "SearchResult",
    "Source",
    "calculate_score",
    "create_default_sources",
    "rank_results",
]
