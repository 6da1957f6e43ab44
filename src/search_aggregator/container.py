"""
Application DI Container (dependency-injector).

Builds the single process-wide cache, the provider clients and the
aggregator that ties them together.

Usage::

    from search_aggregator.config import Settings
    from search_aggregator.container import ApplicationContainer

    container = ApplicationContainer()
    container.config.from_dict(Settings.from_env().to_dict())

    aggregator = container.aggregator()

    # In tests, override any provider:
    container.sources.override(providers.Object([fake_source]))
"""

from __future__ import annotations

import logging

from dependency_injector import containers, providers

from search_aggregator.application.search import SearchAggregator
from search_aggregator.infrastructure.cache import ResultCache, wall_clock_ms
from search_aggregator.infrastructure.sources import create_default_sources

logger = logging.getLogger(__name__)


def _create_sources(user_agent: str, http_timeout: float, github_token: str | None) -> list:
    """Factory for the four provider clients, in merge order."""
    logger.debug(f"Creating provider clients (timeout={http_timeout}s)")
    return create_default_sources(
        user_agent=user_agent,
        timeout=http_timeout,
        github_token=github_token or None,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for the search aggregator.

    Manages creation and lifecycle of all core services:
    - ``clock``: wall-clock milliseconds
    - ``cache``: the result cache, one per process
    - ``sources``: provider clients
    - ``aggregator``: cache-aware fan-out orchestrator
    """

    config = providers.Configuration()

    clock = providers.Object(wall_clock_ms)

    cache = providers.Singleton(
        ResultCache,
        ttl_ms=config.cache_ttl_ms,
        capacity=config.cache_capacity,
        clock=clock,
    )

    sources = providers.Singleton(
        _create_sources,
        user_agent=config.user_agent,
        http_timeout=config.http_timeout,
        github_token=config.github_token,
    )

    aggregator = providers.Singleton(
        SearchAggregator,
        sources=sources,
        cache=cache,
        clock=clock,
    )


__all__ = ["ApplicationContainer"]
