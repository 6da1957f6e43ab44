"""
Hacker News Integration

Searches Hacker News stories through the Algolia search API.

API Documentation: https://hn.algolia.com/api

No API key required.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

from search_aggregator.infrastructure.sources.base_client import (
    DEFAULT_LIMIT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    NO_DESCRIPTION,
    BaseAPIClient,
)
from search_aggregator.models import HackerNewsMetadata, SearchResult, Source

logger = logging.getLogger(__name__)

HN_SEARCH_URL = "https://hn.algolia.com/api/v1/search"
HN_ITEM_URL = "https://news.ycombinator.com/item?id="


class HackerNewsClient(BaseAPIClient):
    """
    Hacker News story search client.

    Usage:
        async with HackerNewsClient() as client:
            results = await client.search("rust async")
    """

    source = Source.HACKERNEWS
    _service_name = "HackerNews"

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        limit: int = DEFAULT_LIMIT,
    ):
        self._limit = limit
        super().__init__(timeout=timeout, headers={"User-Agent": user_agent})

    async def search(self, query: str) -> list[SearchResult]:
        """
        Search stories.

        Args:
            query: Free-text query

        Returns:
            Up to ``limit`` stories; [] on any failure
        """
        try:
            params = {
                "query": query,
                "tags": "story",
                "hitsPerPage": str(self._limit),
            }
            data = await self._make_request(f"{HN_SEARCH_URL}?{urllib.parse.urlencode(params)}")
            if not isinstance(data, dict):
                return []

            hits = data.get("hits")
            if not hits:
                return []

            return [self._normalize_hit(hit) for hit in hits]

        except Exception as e:
            logger.exception(f"HackerNews search failed: {e}")
            return []

    @staticmethod
    def _normalize_hit(hit: dict[str, Any]) -> SearchResult:
        object_id = hit["objectID"]
        return SearchResult(
            id=f"hackernews-{object_id}",
            source=Source.HACKERNEWS,
            title=hit.get("title") or "No title",
            snippet=hit.get("story_text") or hit.get("comment_text") or NO_DESCRIPTION,
            url=hit.get("url") or f"{HN_ITEM_URL}{object_id}",
            metadata=HackerNewsMetadata(
                points=hit.get("points") or 0,
                num_comments=hit.get("num_comments") or 0,
                author=hit.get("author"),
                created_at=hit.get("created_at"),
            ),
        )
