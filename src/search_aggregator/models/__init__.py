"""
Data Models for Multi-Provider Search

Standardized structures for search hits from Wikipedia, Hacker News,
Open Library and GitHub, plus the cache and response envelopes.
"""

from .search_result import (
    AggregatedResponse,
    CacheEntry,
    GitHubMetadata,
    HackerNewsMetadata,
    OpenLibraryMetadata,
    ResultMetadata,
    SearchResult,
    Source,
    WikipediaMetadata,
)

__all__ = [
    "AggregatedResponse",
    "CacheEntry",
    "GitHubMetadata",
    "HackerNewsMetadata",
    "OpenLibraryMetadata",
    "ResultMetadata",
    "SearchResult",
    "Source",
    "WikipediaMetadata",
]
