"""
GitHub Integration

Searches public repositories, most-starred first.

API Documentation: https://docs.github.com/en/rest/search/search#search-repositories

Unauthenticated search is limited to a few requests per minute. GitHub
answers 403 when that budget is spent; this is treated as a silent skip.
An optional token raises the limit.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

import httpx

from search_aggregator.infrastructure.sources.base_client import (
    _CONTINUE,
    DEFAULT_LIMIT,
    DEFAULT_TIMEOUT,
    NO_DESCRIPTION,
    BaseAPIClient,
)
from search_aggregator.models import GitHubMetadata, SearchResult, Source

logger = logging.getLogger(__name__)

GH_SEARCH_URL = "https://api.github.com/search/repositories"


class GitHubClient(BaseAPIClient):
    """
    GitHub repository search client.

    Usage:
        async with GitHubClient(token=os.environ.get("GITHUB_TOKEN")) as client:
            results = await client.search("http client")
    """

    source = Source.GITHUB
    _service_name = "GitHub"

    def __init__(
        self,
        token: str | None = None,
        user_agent: str = "Search-Aggregator",
        timeout: float = DEFAULT_TIMEOUT,
        limit: int = DEFAULT_LIMIT,
    ):
        self._limit = limit
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        super().__init__(timeout=timeout, headers=headers)

    def _handle_expected_status(self, response: httpx.Response, url: str) -> dict[str, Any] | str | None:
        """403 means the search rate limit is exhausted: skip quietly."""
        if response.status_code == 403:
            logger.warning("GitHub API rate limit exceeded")
            return None
        return _CONTINUE  # type: ignore[return-value]

    async def search(self, query: str) -> list[SearchResult]:
        """
        Search repositories sorted by stars.

        Args:
            query: Free-text query

        Returns:
            Up to ``limit`` repositories; [] on any failure or rate limit
        """
        try:
            params = {
                "q": query,
                "sort": "stars",
                "order": "desc",
                "per_page": str(self._limit),
            }
            data = await self._make_request(f"{GH_SEARCH_URL}?{urllib.parse.urlencode(params)}")
            if not isinstance(data, dict):
                return []

            items = data.get("items")
            if not items:
                return []

            return [self._normalize_repo(repo) for repo in items]

        except Exception as e:
            logger.exception(f"GitHub search failed: {e}")
            return []

    @staticmethod
    def _normalize_repo(repo: dict[str, Any]) -> SearchResult:
        return SearchResult(
            id=f"github-{repo['id']}",
            source=Source.GITHUB,
            title=repo.get("full_name") or repo.get("name") or "",
            snippet=repo.get("description") or NO_DESCRIPTION,
            url=repo.get("html_url") or "",
            metadata=GitHubMetadata(
                stars=repo.get("stargazers_count") or 0,
                forks=repo.get("forks_count") or 0,
                language=repo.get("language"),
                updated_at=repo.get("updated_at"),
            ),
        )
