"""
Wikipedia Integration

Searches English Wikipedia through the MediaWiki Action API.

API Documentation: https://www.mediawiki.org/wiki/API:Search

Two calls are needed per query:
1. list=search returns titles, page ids and an HTML-highlighted snippet
2. prop=extracts returns the plain-text intro for those page ids

The intro extract is preferred; the search snippet (markup stripped) is the
fallback. Wikipedia rejects requests without a User-Agent.
"""

from __future__ import annotations

import logging
import re
import urllib.parse
from typing import Any

from search_aggregator.infrastructure.sources.base_client import (
    DEFAULT_LIMIT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    MAX_SNIPPET_LENGTH,
    BaseAPIClient,
)
from search_aggregator.models import SearchResult, Source, WikipediaMetadata

logger = logging.getLogger(__name__)

WIKI_API_URL = "https://en.wikipedia.org/w/api.php"
WIKI_PAGE_BASE = "https://en.wikipedia.org/wiki/"

_TAG_RE = re.compile(r"<[^>]*>")


def strip_markup(text: str) -> str:
    """Remove HTML tags such as <span class="searchmatch">."""
    return _TAG_RE.sub("", text)


def page_url(title: str) -> str:
    """Canonical article URL for a page title."""
    return WIKI_PAGE_BASE + urllib.parse.quote(title.replace(" ", "_"), safe="")


class WikipediaClient(BaseAPIClient):
    """
    Wikipedia search client.

    Usage:
        async with WikipediaClient() as client:
            results = await client.search("JavaScript")
    """

    source = Source.WIKIPEDIA
    _service_name = "Wikipedia"

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        limit: int = DEFAULT_LIMIT,
    ):
        self._limit = limit
        super().__init__(
            timeout=timeout,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
        )

    def _search_url(self, query: str) -> str:
        params = {
            "action": "query",
            "list": "search",
            "srsearch": query,
            "format": "json",
            "origin": "*",
            "srlimit": str(self._limit),
        }
        return f"{WIKI_API_URL}?{urllib.parse.urlencode(params)}"

    def _extract_url(self, page_ids: list[int]) -> str:
        params = {
            "action": "query",
            "prop": "extracts",
            "exintro": "",
            "explaintext": "",
            "pageids": "|".join(str(p) for p in page_ids),
            "format": "json",
            "origin": "*",
        }
        return f"{WIKI_API_URL}?{urllib.parse.urlencode(params)}"

    async def search(self, query: str) -> list[SearchResult]:
        """
        Search Wikipedia articles.

        Args:
            query: Free-text query

        Returns:
            Up to ``limit`` results; [] on any failure
        """
        try:
            data = await self._make_request(self._search_url(query))
            if not isinstance(data, dict):
                return []

            hits = (data.get("query") or {}).get("search")
            if not hits:
                return []

            extracts = await self._fetch_extracts([hit["pageid"] for hit in hits])
            return [self._normalize_hit(hit, index, extracts) for index, hit in enumerate(hits)]

        except Exception as e:
            logger.exception(f"Wikipedia search failed: {e}")
            return []

    async def _fetch_extracts(self, page_ids: list[int]) -> dict[str, Any]:
        """Fetch intro extracts keyed by page id (as string)."""
        data = await self._make_request(self._extract_url(page_ids))
        if not isinstance(data, dict):
            return {}
        return (data.get("query") or {}).get("pages") or {}

    @staticmethod
    def _normalize_hit(hit: dict[str, Any], index: int, extracts: dict[str, Any]) -> SearchResult:
        pageid = hit["pageid"]
        title = hit["title"]
        page = extracts.get(str(pageid)) or {}
        snippet = page.get("extract") or strip_markup(hit.get("snippet", ""))

        return SearchResult(
            id=f"wikipedia-{pageid}",
            source=Source.WIKIPEDIA,
            title=title,
            snippet=snippet[:MAX_SNIPPET_LENGTH],
            url=page_url(title),
            metadata=WikipediaMetadata(index=index, pageid=pageid),
        )
