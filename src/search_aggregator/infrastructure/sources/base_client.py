"""
Base API Client - Common HTTP request pattern for provider adapters.

Provides a reusable base class with:
- httpx.AsyncClient management
- Typed errors for transport failures and non-success statuses
- A safe request wrapper that logs and returns None instead of raising
- A hook for provider-specific status codes (e.g. GitHub 403)

Requests are never retried: a failed provider call contributes nothing to
the current aggregation and the next user request tries again.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from typing_extensions import Self

from search_aggregator.core.exceptions import (
    NetworkError,
    ParseError,
    RateLimitError,
    SearchAggregatorError,
    ServiceUnavailableError,
)
from search_aggregator.models import SearchResult, Source

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "SearchAggregator/1.0 (Educational Project)"
NO_DESCRIPTION = "No description available"
MAX_SNIPPET_LENGTH = 300
DEFAULT_LIMIT = 5


class BaseAPIClient:
    """
    Base class for provider adapters.

    Subclasses set ``source`` and ``_service_name`` and implement
    :meth:`search`. They can override:
    - `_handle_expected_status()`: Short-circuit service-specific status codes
    - `_parse_response()`: Custom response processing

    Example:
        class MyClient(BaseAPIClient):
            _service_name = "MyAPI"

            async def search(self, query: str) -> list[SearchResult]:
                data = await self._make_request(f"/search?q={query}")
                ...
    """

    source: Source
    _service_name: str = "API"

    def __init__(
        self,
        base_url: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize base client.

        Args:
            base_url: Base URL for the API (optional, can pass full URLs)
            timeout: Request timeout in seconds; bounds how long this
                     provider can delay an aggregation
            headers: Default headers for all requests
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            headers=headers or {},
            follow_redirects=True,
            limits=httpx.Limits(
                max_connections=20,
                max_keepalive_connections=10,
                keepalive_expiry=30.0,
            ),
        )

    async def search(self, query: str) -> list[SearchResult]:
        """Search the provider; must return [] instead of raising."""
        raise NotImplementedError

    def _build_url(self, url: str) -> str:
        """Build full URL from path or full URL."""
        if url.startswith(("http://", "https://")):
            return url
        return f"{self._base_url}{url}"

    async def _fetch(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        expect_json: bool = True,
    ) -> dict[str, Any] | str | None:
        """
        Make a GET request and decode the body.

        Returns:
            Parsed JSON, response text, or whatever the status hook returned

        Raises:
            RateLimitError: HTTP 429
            ServiceUnavailableError: HTTP 5xx
            NetworkError: Connection failure, timeout, or other non-2xx status
            ParseError: Body is not valid JSON
        """
        full_url = self._build_url(url)

        try:
            response = await self._execute_request(full_url, headers=headers)
        except httpx.TimeoutException as e:
            raise NetworkError(f"{self._service_name}: request timeout after {self._timeout}s") from e
        except httpx.RequestError as e:
            raise NetworkError(f"{self._service_name}: connection failed: {e}") from e

        expected = self._handle_expected_status(response, full_url)
        if expected is not _CONTINUE:
            return expected

        status = response.status_code
        if status == 429:
            raise RateLimitError(
                "Rate limited",
                service=self._service_name,
                retry_after=self._get_retry_after(response),
            )
        if status >= 500:
            raise ServiceUnavailableError(
                f"HTTP {status}: {response.reason_phrase}",
                service=self._service_name,
                status_code=status,
            )
        if not 200 <= status < 300:
            raise NetworkError(f"{self._service_name}: HTTP {status}: {response.reason_phrase} for {full_url}")

        try:
            return self._parse_response(response, expect_json)
        except (json.JSONDecodeError, ValueError) as e:
            raise ParseError("Invalid JSON response", source=self._service_name) from e

    async def _make_request(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        expect_json: bool = True,
    ) -> dict[str, Any] | str | None:
        """
        Safe version of _fetch that returns None on error.

        Args:
            url: Full URL or path (appended to base_url)
            headers: Additional headers for this request
            expect_json: If True, parse response as JSON; otherwise return text

        Returns:
            Parsed JSON dict, response text, or None on error
        """
        try:
            return await self._fetch(url, headers=headers, expect_json=expect_json)
        except RateLimitError as e:
            logger.warning(f"{e}, skipping provider for this request")
            return None
        except SearchAggregatorError as e:
            logger.warning(f"{self._service_name} request failed: {e}")
            return None
        except Exception as e:
            logger.exception(f"{self._service_name} request failed: {e}")
            return None

    async def _execute_request(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute the actual HTTP request. Override for custom behavior."""
        return await self._client.get(url, headers=headers or {})

    def _handle_expected_status(self, response: httpx.Response, url: str) -> dict[str, Any] | str | None:
        """
        Handle expected non-200 status codes.

        Override in subclasses for service-specific behavior.
        Return a value to short-circuit (e.g., None for a rate-limit skip).
        Return the sentinel _CONTINUE to continue normal processing.

        Default: no special handling.
        """
        return _CONTINUE  # type: ignore[return-value]

    def _parse_response(self, response: httpx.Response, expect_json: bool) -> dict[str, Any] | str:
        """Parse response body. Override for custom extraction logic."""
        if expect_json:
            return response.json()
        return response.text

    @staticmethod
    def _get_retry_after(response: httpx.Response) -> float | None:
        """Extract Retry-After from response headers."""
        try:
            value = response.headers.get("Retry-After")
            return float(value) if value is not None else None
        except (ValueError, TypeError):
            return None

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


# Sentinel object to indicate "continue normal processing" from _handle_expected_status
_CONTINUE = object()
