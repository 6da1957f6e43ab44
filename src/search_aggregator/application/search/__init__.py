"""
Unified Search Gateway

Merges results from every provider into one ranked list.

Key Components:
- scoring: Heuristic 0-100 relevance score and stable ranking
- SearchAggregator: Cache check, provider fan-out, ranking, cache write

Architecture:
    User Query
        │
        ▼
    ┌──────────────────┐
    │ SearchAggregator │  ← cache hit returns immediately
    └────────┬─────────┘
             │ miss
             ▼
    ┌──────────────────┐
    │ Provider fan-out │  ← 4 concurrent, isolated calls
    └────────┬─────────┘
             ▼
    ┌──────────────────┐
    │   rank_results   │  ← title + quality + source signal
    └──────────────────┘
"""

from .aggregator import SearchAggregator, SearchSource
from .scoring import (
    MAX_SCORE,
    calculate_score,
    content_quality,
    rank_results,
    source_signal,
    title_relevance,
)

__all__ = [
    "MAX_SCORE",
    "SearchAggregator",
    "SearchSource",
    "calculate_score",
    "content_quality",
    "rank_results",
    "source_signal",
    "title_relevance",
]
