"""
Search Aggregator - Cache-Aware Multi-Provider Fan-out

Flow for one query:

    query
      │
      ▼
    ResultCache.get ──hit──▶ stored results (cached=True)
      │ miss
      ▼
    ┌───────────┬────────────┬─────────────┬──────────┐
    │ Wikipedia │ HackerNews │ OpenLibrary │  GitHub  │   concurrent,
    └───────────┴────────────┴─────────────┴──────────┘   each isolated
      │ concatenate in provider order
      ▼
    rank_results ──▶ ResultCache.put ──▶ response (cached=False)

A failing provider contributes an empty list. Concurrent misses for the
same query are not deduplicated; each computes and writes the cache, and
the last write wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Protocol

from search_aggregator.application.search.scoring import rank_results
from search_aggregator.core.async_utils import gather_with_errors, run_isolated
from search_aggregator.core.exceptions import AggregationError, InvalidQueryError
from search_aggregator.infrastructure.cache import ResultCache, wall_clock_ms
from search_aggregator.models import AggregatedResponse, CacheEntry, SearchResult

logger = logging.getLogger(__name__)


class SearchSource(Protocol):
    """Anything that can search one provider without raising."""

    async def search(self, query: str) -> list[SearchResult]: ...


Ranker = Callable[[Iterable[SearchResult], str], list[SearchResult]]


class SearchAggregator:
    """
    Orchestrates providers, scoring and the cache for one query at a time.

    This is the only component the HTTP layer talks to.

    Example:
        aggregator = SearchAggregator(create_default_sources(), ResultCache())
        response = await aggregator.aggregate("rust")
        response.served_from_cache  # False the first time
    """

    def __init__(
        self,
        sources: Sequence[SearchSource],
        cache: ResultCache,
        clock: Callable[[], int] = wall_clock_ms,
        ranker: Ranker = rank_results,
    ):
        """
        Initialize aggregator.

        Args:
            sources: Provider adapters; their order is the merge order
            cache: Process-wide result cache
            clock: Returns the current time in milliseconds
            ranker: Scores and sorts the merged list
        """
        self._sources = list(sources)
        self._cache = cache
        self._clock = clock
        self._ranker = ranker

    @property
    def cache(self) -> ResultCache:
        return self._cache

    @property
    def sources(self) -> list[SearchSource]:
        return list(self._sources)

    async def aggregate(self, query: str) -> AggregatedResponse:
        """
        Return ranked results for a query, from cache when fresh.

        Args:
            query: Non-blank query as typed by the user

        Returns:
            AggregatedResponse with ``served_from_cache`` set on a hit

        Raises:
            InvalidQueryError: Query is blank
            AggregationError: A failure escaped every provider boundary
        """
        if not query or not query.strip():
            raise InvalidQueryError(query)

        cached = self._cache.get(query)
        if cached is not None:
            logger.info(f"Serving {len(cached.results)} cached results for {query!r}")
            return AggregatedResponse(
                query=cached.query,
                results=cached.results,
                timestamp=cached.timestamp,
                served_from_cache=True,
            )

        try:
            merged = await self._fan_out(query)
            ranked = tuple(self._ranker(merged, query))
        except Exception as e:
            logger.exception(f"Aggregation failed for {query!r}: {e}")
            raise AggregationError(details=str(e) or type(e).__name__) from e

        entry = CacheEntry(query=query, results=ranked, timestamp=self._clock())
        self._cache.put(query, entry)
        logger.info(f"Aggregated {len(ranked)} results for {query!r}")

        return AggregatedResponse(
            query=query,
            results=entry.results,
            timestamp=entry.timestamp,
            served_from_cache=False,
        )

    async def _fan_out(self, query: str) -> list[SearchResult]:
        """Query every provider concurrently and concatenate in provider order."""
        outputs = await gather_with_errors(
            *(
                run_isolated(source.search(query), list, label=_source_label(source))
                for source in self._sources
            )
        )

        merged: list[SearchResult] = []
        for source, output in zip(self._sources, outputs):
            logger.debug(f"{_source_label(source)} returned {len(output)} results")
            merged.extend(output)
        return merged

    async def close(self) -> None:
        """Close provider clients that hold network resources."""
        for source in self._sources:
            close = getattr(source, "close", None)
            if close is not None:
                await close()


def _source_label(source: object) -> str:
    return getattr(source, "_service_name", None) or type(source).__name__
