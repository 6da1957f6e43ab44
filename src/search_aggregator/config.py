"""
Runtime configuration read from environment variables.

Environment Variables:
    SEARCH_AGG_HOST: Server host (default: 0.0.0.0)
    SEARCH_AGG_PORT: Server port (default: 8787)
    SEARCH_AGG_CACHE_TTL_SECONDS: Cache entry lifetime (default: 300)
    SEARCH_AGG_CACHE_CAPACITY: Entry count that triggers a TTL sweep (default: 100)
    SEARCH_AGG_HTTP_TIMEOUT: Per-provider request timeout in seconds (default: 10)
    SEARCH_AGG_USER_AGENT: User-Agent sent to providers
    SEARCH_AGG_LOG_LEVEL: Logging level (default: INFO)
    GITHUB_TOKEN: Optional token for a higher GitHub search rate limit
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass

from search_aggregator.core.exceptions import ConfigurationError

DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 8787
DEFAULT_CACHE_TTL_SECONDS = 300
DEFAULT_CACHE_CAPACITY = 100
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "SearchAggregator/1.0 (Educational Project)"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Process-wide settings."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    cache_capacity: int = DEFAULT_CACHE_CAPACITY
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = DEFAULT_LOG_LEVEL
    github_token: str | None = None

    @property
    def cache_ttl_ms(self) -> int:
        return self.cache_ttl_seconds * 1000

    def to_dict(self) -> dict[str, object]:
        """Plain dict for the DI container configuration."""
        data = asdict(self)
        data["cache_ttl_ms"] = self.cache_ttl_ms
        return data

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """
        Build settings from environment variables.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed or is not positive
        """
        env = os.environ if environ is None else environ

        return cls(
            host=env.get("SEARCH_AGG_HOST", DEFAULT_HOST),
            port=_positive(env, "SEARCH_AGG_PORT", DEFAULT_PORT, int),
            cache_ttl_seconds=_positive(env, "SEARCH_AGG_CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS, int),
            cache_capacity=_positive(env, "SEARCH_AGG_CACHE_CAPACITY", DEFAULT_CACHE_CAPACITY, int),
            http_timeout=_positive(env, "SEARCH_AGG_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, float),
            user_agent=env.get("SEARCH_AGG_USER_AGENT", "").strip() or DEFAULT_USER_AGENT,
            log_level=env.get("SEARCH_AGG_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            github_token=env.get("GITHUB_TOKEN", "").strip() or None,
        )


def _positive[N: (int, float)](env: Mapping[str, str], name: str, default: N, cast: type[N]) -> N:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value
