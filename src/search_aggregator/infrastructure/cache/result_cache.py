"""
Result Cache

In-memory cache of aggregated search responses.

Features:
- Time-based expiration measured from each entry's own timestamp
- Lazy eviction of a stale entry when it is read
- TTL sweep of every stale entry once the entry count exceeds capacity
- Case/whitespace-insensitive keys
- Injectable clock for deterministic tests

There is no LRU eviction: entries younger than the TTL always survive a
sweep, so the map may grow past capacity while all entries are fresh.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from search_aggregator.models import CacheEntry

logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 5 * 60 * 1000  # 5 minutes
DEFAULT_CAPACITY = 100


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


class ResultCache:
    """
    Keyed, time-bounded store of aggregated responses.

    One instance is created per process and handed to the aggregator.
    Operations never raise; a miss is a normal outcome.

    Example:
        cache = ResultCache(ttl_ms=300_000, capacity=100)

        cache.put("Python", CacheEntry(query="Python", results=(), timestamp=now))
        entry = cache.get("  python ")  # same entry
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_TTL_MS,
        capacity: int = DEFAULT_CAPACITY,
        clock: Callable[[], int] = wall_clock_ms,
    ):
        """
        Initialize cache.

        Args:
            ttl_ms: Maximum entry age in milliseconds
            capacity: Entry count above which a write triggers a TTL sweep
            clock: Returns the current time in milliseconds
        """
        self._entries: dict[str, CacheEntry] = {}
        self._ttl_ms = ttl_ms
        self._capacity = capacity
        self._clock = clock
        self._stats = CacheStats()

    @property
    def stats(self) -> CacheStats:
        """Get cache statistics."""
        return self._stats

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    @property
    def capacity(self) -> int:
        return self._capacity

    @staticmethod
    def normalize_key(query: str) -> str:
        """Normalize a query into its cache key."""
        return query.lower().strip()

    def _is_expired(self, entry: CacheEntry, now: int) -> bool:
        return now - entry.timestamp > self._ttl_ms

    def get(self, query: str) -> CacheEntry | None:
        """
        Look up a previous aggregation.

        A stale entry is removed as a side effect and reported as absent.

        Args:
            query: Query as typed by the user

        Returns:
            The stored entry, or None if missing or expired
        """
        key = self.normalize_key(query)
        entry = self._entries.get(key)
        if entry is None:
            self._stats.misses += 1
            logger.debug(f"Cache miss: {key!r}")
            return None

        if self._is_expired(entry, self._clock()):
            del self._entries[key]
            self._stats.misses += 1
            self._stats.expirations += 1
            logger.debug(f"Cache entry expired: {key!r}")
            return None

        self._stats.hits += 1
        logger.debug(f"Cache hit: {key!r}")
        return entry

    def put(self, query: str, entry: CacheEntry) -> None:
        """
        Store an aggregation, replacing any entry under the same key.

        Args:
            query: Query as typed by the user
            entry: Fully scored aggregation
        """
        self._entries[self.normalize_key(query)] = entry

        if len(self._entries) > self._capacity:
            self.cleanup_expired()

    def cleanup_expired(self) -> int:
        """
        Remove all expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        stale = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
        for key in stale:
            del self._entries[key]

        self._stats.expirations += len(stale)
        if stale:
            logger.info(f"Cache sweep removed {len(stale)} expired entries, {len(self._entries)} remain")
        return len(stale)

    def invalidate(self, query: str) -> bool:
        """
        Invalidate cache entry.

        Returns:
            True if entry was removed
        """
        return self._entries.pop(self.normalize_key(query), None) is not None

    def clear(self) -> int:
        """
        Clear all cache entries.

        Returns:
            Number of entries cleared
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def __len__(self) -> int:
        """Get number of stored entries (expired ones included until swept)."""
        return len(self._entries)

    def __contains__(self, query: str) -> bool:
        """Check if a key is stored (may be expired)."""
        return self.normalize_key(query) in self._entries


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    expirations: int = 0

    @property
    def total_requests(self) -> int:
        """Total cache requests."""
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Cache hit rate (0-1)."""
        total = self.total_requests
        return self.hits / total if total > 0 else 0.0

    def reset(self) -> None:
        """Reset statistics."""
        self.hits = 0
        self.misses = 0
        self.expirations = 0
