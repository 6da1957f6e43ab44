"""
Application Layer - Use Cases and Business Logic Orchestration

Contains:
- search: Scoring, ranking and the cache-aware aggregator
"""

from .search import SearchAggregator, calculate_score, rank_results

__all__ = [
    "SearchAggregator",
    "calculate_score",
    "rank_results",
]
