"""
Cache Infrastructure

Short-lived in-memory cache for aggregated search responses.
"""

from __future__ import annotations

from search_aggregator.infrastructure.cache.result_cache import (
    CacheStats,
    ResultCache,
    wall_clock_ms,
)

__all__ = [
    "CacheStats",
    "ResultCache",
    "wall_clock_ms",
]
