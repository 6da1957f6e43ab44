"""
SearchResult - Normalized Hit Model for Multi-Provider Search

This module defines the canonical data structure for a single search hit,
so that Wikipedia pages, Hacker News stories, Open Library works and GitHub
repositories can be merged and ranked together.

Architecture Decision:
    Provider-specific metadata is a tagged union keyed by ``source``.
    Each variant carries only the named fields that provider supplies,
    and the scoring engine dispatches on the variant type.

Supported Sources:
    - Wikipedia (MediaWiki search API)
    - Hacker News (Algolia search API)
    - Open Library (search.json)
    - GitHub (repository search)

Example:
    >>> result = SearchResult(
    ...     id="github-1",
    ...     source=Source.GITHUB,
    ...     title="python/cpython",
    ...     snippet="The Python programming language",
    ...     url="https://github.com/python/cpython",
    ...     metadata=GitHubMetadata(stars=60000),
    ... )
    >>> result.score
    0.0
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class Source(Enum):
    """Search providers, in merge order."""
    WIKIPEDIA = "wikipedia"
    HACKERNEWS = "hackernews"
    OPENLIBRARY = "openlibrary"
    GITHUB = "github"


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class WikipediaMetadata:
    """Search-rank position and page id of a Wikipedia hit."""
    index: int | None = None  # 0-based position in the search response
    pageid: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({"index": self.index, "pageid": self.pageid})


@dataclass(frozen=True)
class HackerNewsMetadata:
    """Story statistics from the Algolia HN index."""
    points: int | None = None
    num_comments: int | None = None
    author: str | None = None
    created_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "points": self.points,
            "numComments": self.num_comments,
            "author": self.author,
            "createdAt": self.created_at,
        })


@dataclass(frozen=True)
class OpenLibraryMetadata:
    """Edition and authorship data of an Open Library work."""
    edition_count: int | None = None
    publish_year: int | None = None
    authors: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "editionCount": self.edition_count,
            "publishYear": self.publish_year,
            "authors": list(self.authors) if self.authors is not None else None,
        })


@dataclass(frozen=True)
class GitHubMetadata:
    """Repository popularity data."""
    stars: int | None = None
    forks: int | None = None
    language: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "stars": self.stars,
            "forks": self.forks,
            "language": self.language,
            "updatedAt": self.updated_at,
        })


ResultMetadata = WikipediaMetadata | HackerNewsMetadata | OpenLibraryMetadata | GitHubMetadata


@dataclass(frozen=True)
class SearchResult:
    """
    A normalized hit from any provider.

    ``score`` stays 0 until the scoring engine runs; ranking produces
    scored copies via :meth:`with_score` and never mutates its input.
    """
    id: str  # provider-prefixed, e.g. "wikipedia-12345"
    source: Source
    title: str
    snippet: str
    url: str
    score: float = 0.0
    metadata: ResultMetadata | None = None

    def with_score(self, score: float) -> SearchResult:
        """Return a copy carrying the given score."""
        return replace(self, score=score)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        This is the shape returned by the HTTP API.
        """
        return {
            "id": self.id,
            "source": self.source.value,
            "title": self.title,
            "snippet": self.snippet,
            "score": self.score,
            "url": self.url,
            "metadata": self.metadata.to_dict() if self.metadata else {},
        }


@dataclass(frozen=True)
class CacheEntry:
    """
    One cached aggregation.

    Entries are replaced wholesale and must be treated as read-only.
    """
    query: str  # as typed by the user, before normalization
    results: tuple[SearchResult, ...]
    timestamp: int  # wall-clock milliseconds


@dataclass(frozen=True)
class AggregatedResponse:
    """Outcome of one aggregation cycle."""
    query: str
    results: tuple[SearchResult, ...]
    timestamp: int
    served_from_cache: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "results": [r.to_dict() for r in self.results],
            "timestamp": self.timestamp,
            "cached": self.served_from_cache,
        }
