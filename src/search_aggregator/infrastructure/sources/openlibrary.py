"""
Open Library Integration

Searches books through the Open Library search API.

API Documentation: https://openlibrary.org/dev/docs/api/search

Open Library has no description field in search results, so the snippet is
synthesized from author names, first publication year and subjects.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

from search_aggregator.infrastructure.sources.base_client import (
    DEFAULT_LIMIT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    MAX_SNIPPET_LENGTH,
    BaseAPIClient,
)
from search_aggregator.models import OpenLibraryMetadata, SearchResult, Source

logger = logging.getLogger(__name__)

OL_BASE = "https://openlibrary.org"
OL_SEARCH_URL = f"{OL_BASE}/search.json"


def build_snippet(doc: dict[str, Any]) -> str:
    """
    Synthesize a description for a work.

    Format: "By <authors> (<year>). <up to three subjects>"
    """
    authors = ", ".join(doc.get("author_name") or []) or "Unknown"
    year = doc.get("first_publish_year") or "N/A"
    subjects = ", ".join((doc.get("subject") or [])[:3]) or "No subjects listed"
    return f"By {authors} ({year}). {subjects}"[:MAX_SNIPPET_LENGTH]


class OpenLibraryClient(BaseAPIClient):
    """
    Open Library work search client.

    Usage:
        async with OpenLibraryClient() as client:
            results = await client.search("dune")
    """

    source = Source.OPENLIBRARY
    _service_name = "OpenLibrary"

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
        Search works.

        Args:
            query: Free-text query

        Returns:
            Up to ``limit`` works; [] on any failure
        """
        try:
            params = {"q": query, "limit": str(self._limit)}
            data = await self._make_request(f"{OL_SEARCH_URL}?{urllib.parse.urlencode(params)}")
            if not isinstance(data, dict):
                return []

            docs = data.get("docs")
            if not docs:
                return []

            return [self._normalize_doc(doc) for doc in docs[: self._limit]]

        except Exception as e:
            logger.exception(f"OpenLibrary search failed: {e}")
            return []

    @staticmethod
    def _normalize_doc(doc: dict[str, Any]) -> SearchResult:
        key = doc["key"]  # e.g. "/works/OL45804W"
        authors = doc.get("author_name")
        return SearchResult(
            id=f"openlibrary-{key}",
            source=Source.OPENLIBRARY,
            title=doc.get("title") or "No title",
            snippet=build_snippet(doc),
            url=f"{OL_BASE}{key}",
            metadata=OpenLibraryMetadata(
                edition_count=doc.get("edition_count") or 1,
                publish_year=doc.get("first_publish_year"),
                authors=tuple(authors) if authors else None,
            ),
        )
