"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from search_aggregator.models import (
    GitHubMetadata,
    HackerNewsMetadata,
    OpenLibraryMetadata,
    SearchResult,
    Source,
    WikipediaMetadata,
)

# ============================================================
# Clock
# ============================================================


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    """Provide a controllable clock starting at a fixed instant."""
    return FakeClock()


# ============================================================
# Sample Results
# ============================================================


@pytest.fixture
def wiki_result():
    return SearchResult(
        id="wikipedia-23862",
        source=Source.WIKIPEDIA,
        title="Python (programming language)",
        snippet="Python is a high-level, general-purpose programming language. " * 2,
        url="https://en.wikipedia.org/wiki/Python_(programming_language)",
        metadata=WikipediaMetadata(index=0, pageid=23862),
    )


@pytest.fixture
def hn_result():
    return SearchResult(
        id="hackernews-123",
        source=Source.HACKERNEWS,
        title="Show HN: A faster Python",
        snippet="No description available",
        url="https://example.com/faster-python",
        metadata=HackerNewsMetadata(points=250, num_comments=80, author="pg"),
    )


@pytest.fixture
def book_result():
    return SearchResult(
        id="openlibrary-/works/OL1W",
        source=Source.OPENLIBRARY,
        title="Learning Python",
        snippet="By Mark Lutz (1999). Python, Programming",
        url="https://openlibrary.org/works/OL1W",
        metadata=OpenLibraryMetadata(edition_count=4, publish_year=1999, authors=("Mark Lutz",)),
    )


@pytest.fixture
def repo_result():
    return SearchResult(
        id="github-1",
        source=Source.GITHUB,
        title="python/cpython",
        snippet="The Python programming language",
        url="https://github.com/python/cpython",
        metadata=GitHubMetadata(stars=60000, forks=30000, language="Python"),
    )


@pytest.fixture
def sample_results(wiki_result, hn_result, book_result, repo_result):
    """One result per provider, in merge order."""
    return [wiki_result, hn_result, book_result, repo_result]


# ============================================================
# Mock Providers
# ============================================================


def make_source(results=None, side_effect=None, name="FakeSource"):
    """Build a provider stub whose search() is an AsyncMock."""
    source = MagicMock()
    source._service_name = name
    source.search = AsyncMock(return_value=results or [], side_effect=side_effect)
    source.close = AsyncMock()
    return source


def make_response(status_code=200, json_data=None, headers=None, reason="OK"):
    """Build a fake httpx.Response for client tests."""
    response = MagicMock()
    response.status_code = status_code
    response.reason_phrase = reason
    response.headers = headers or {}
    response.json.return_value = json_data
    return response


@pytest.fixture
def source_factory():
    """Factory fixture for provider stubs."""
    return make_source


@pytest.fixture
def response_factory():
    """Factory fixture for fake HTTP responses."""
    return make_response
