"""
Provider Adapters

One client per search provider. Each converts its provider's response into
``SearchResult`` objects and never raises past its own boundary.

Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                 Aggregator (fan-out/fan-in)             │
    └───────────────────────────┬─────────────────────────────┘
                                │
    ┌──────────────┬────────────┴─┬──────────────┬────────────┐
    │  Wikipedia   │ Hacker News  │ Open Library │   GitHub   │
    │ (2-step API) │  (Algolia)   │ (search.json)│ (403=skip) │
    └──────────────┴──────────────┴──────────────┴────────────┘
"""

from __future__ import annotations

from search_aggregator.infrastructure.sources.base_client import (
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    BaseAPIClient,
)
from search_aggregator.infrastructure.sources.github import GitHubClient
from search_aggregator.infrastructure.sources.hackernews import HackerNewsClient
from search_aggregator.infrastructure.sources.openlibrary import OpenLibraryClient
from search_aggregator.infrastructure.sources.wikipedia import WikipediaClient


def create_default_sources(
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
    github_token: str | None = None,
) -> list[BaseAPIClient]:
    """Create one client per provider, in merge order."""
    return [
        WikipediaClient(user_agent=user_agent, timeout=timeout),
        HackerNewsClient(user_agent=user_agent, timeout=timeout),
        OpenLibraryClient(user_agent=user_agent, timeout=timeout),
        GitHubClient(token=github_token, timeout=timeout),
    ]


__all__ = [
    "BaseAPIClient",
    "GitHubClient",
    "HackerNewsClient",
    "OpenLibraryClient",
    "WikipediaClient",
    "create_default_sources",
]
