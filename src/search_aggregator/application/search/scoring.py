"""
Relevance Scoring for Multi-Provider Search Results.

Each result receives a score in [0, 100] from three components:

1. **Title relevance** (0-40), case-insensitive:
   - Title equals query: 40
   - Title starts with query: 35
   - Title contains query: 20
   - Otherwise: fraction of query words found in the title × 15

2. **Content quality** (0-20), by snippet length in characters:
   - 100-500: 20
   - 50-99: 10
   - any other non-empty length: 5
   - empty: 0

3. **Source signal** (0-40), from provider metadata:
   - Wikipedia: search position, max(40 - index × 5, 5); default 20
   - Hacker News: points, min(5 + points/100 × 35, 40); default 10
   - GitHub: stars, min(5 + stars/1000 × 35, 40); default 10
   - Open Library: editions, min(10 + editions × 3, 40); default 15
   - anything else: 10

The sum is capped at 100. Scoring is a pure function of (result, query).

Architecture:
    Stateless functions called by the Aggregator. Ranking returns scored
    copies and leaves its input untouched.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from search_aggregator.models import (
    GitHubMetadata,
    HackerNewsMetadata,
    OpenLibraryMetadata,
    SearchResult,
    Source,
    WikipediaMetadata,
)

MAX_SCORE = 100.0

# Title relevance
_TITLE_EXACT = 40.0
_TITLE_PREFIX = 35.0
_TITLE_SUBSTRING = 20.0
_TITLE_WORD_WEIGHT = 15.0

# Content quality
_QUALITY_GOOD = 20.0
_QUALITY_SHORT = 10.0
_QUALITY_OTHER = 5.0
_GOOD_SNIPPET_RANGE = (100, 500)
_SHORT_SNIPPET_RANGE = (50, 99)

# Source signal
_SOURCE_CAP = 40.0
_WIKIPEDIA_DEFAULT = 20.0
_WIKIPEDIA_STEP = 5.0
_WIKIPEDIA_FLOOR = 5.0
_HACKERNEWS_DEFAULT = 10.0
_GITHUB_DEFAULT = 10.0
_OPENLIBRARY_DEFAULT = 15.0
_OPENLIBRARY_BASE = 10.0
_OPENLIBRARY_PER_EDITION = 3.0
_POPULARITY_BASE = 5.0
_POPULARITY_SPAN = 35.0
_HN_POINTS_SCALE = 100.0
_GH_STARS_SCALE = 1000.0
_UNKNOWN_SOURCE = 10.0

_WHITESPACE_RE = re.compile(r"\s+")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def title_relevance(title: str, query: str) -> float:
    """
    Score how well the title matches the query (0-40).

    The word-overlap fallback splits the query on whitespace runs, so a
    leading or trailing blank yields an empty word that matches every title.
    """
    title = title.lower()
    query = query.lower()

    if title == query:
        return _TITLE_EXACT
    if title.startswith(query):
        return _TITLE_PREFIX
    if query in title:
        return _TITLE_SUBSTRING

    words = _WHITESPACE_RE.split(query)
    matched = sum(1 for word in words if word in title)
    return matched / len(words) * _TITLE_WORD_WEIGHT


def content_quality(snippet: str) -> float:
    """Score the snippet by its length (0-20)."""
    length = len(snippet)
    if _GOOD_SNIPPET_RANGE[0] <= length <= _GOOD_SNIPPET_RANGE[1]:
        return _QUALITY_GOOD
    if _SHORT_SNIPPET_RANGE[0] <= length <= _SHORT_SNIPPET_RANGE[1]:
        return _QUALITY_SHORT
    if length > 0:
        return _QUALITY_OTHER
    return 0.0


def _popularity(count: float, scale: float) -> float:
    return min(_POPULARITY_BASE + (count / scale) * _POPULARITY_SPAN, _SOURCE_CAP)


def source_signal(result: SearchResult) -> float:
    """
    Score provider-specific popularity/rank metadata (0-40).

    Metadata of the wrong variant for the result's source counts as absent.
    """
    meta = result.metadata

    if result.source is Source.WIKIPEDIA:
        if isinstance(meta, WikipediaMetadata) and _is_number(meta.index):
            return max(_SOURCE_CAP - meta.index * _WIKIPEDIA_STEP, _WIKIPEDIA_FLOOR)
        return _WIKIPEDIA_DEFAULT

    if result.source is Source.HACKERNEWS:
        if isinstance(meta, HackerNewsMetadata) and _is_number(meta.points):
            return _popularity(meta.points, _HN_POINTS_SCALE)
        return _HACKERNEWS_DEFAULT

    if result.source is Source.GITHUB:
        if isinstance(meta, GitHubMetadata) and _is_number(meta.stars):
            return _popularity(meta.stars, _GH_STARS_SCALE)
        return _GITHUB_DEFAULT

    if result.source is Source.OPENLIBRARY:
        if isinstance(meta, OpenLibraryMetadata) and _is_number(meta.edition_count):
            return min(_OPENLIBRARY_BASE + meta.edition_count * _OPENLIBRARY_PER_EDITION, _SOURCE_CAP)
        return _OPENLIBRARY_DEFAULT

    return _UNKNOWN_SOURCE


def calculate_score(result: SearchResult, query: str) -> float:
    """
    Calculate the 0-100 relevance score of a single result.

    Args:
        result: Result to score (its current score is ignored)
        query: Search query as typed by the user

    Returns:
        Sum of title, quality and source components, capped at 100
    """
    total = title_relevance(result.title, query) + content_quality(result.snippet) + source_signal(result)
    return min(total, MAX_SCORE)


def rank_results(results: Iterable[SearchResult], query: str) -> list[SearchResult]:
    """
    Score every result and sort by score, highest first.

    The sort is stable: equal scores keep their input order.

    Returns:
        New list of scored copies; the input is not modified
    """
    scored = [result.with_score(calculate_score(result, query)) for result in results]
    return sorted(scored, key=lambda r: r.score, reverse=True)
