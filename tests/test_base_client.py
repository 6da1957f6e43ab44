"""Tests for BaseAPIClient request handling."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from search_aggregator.core.exceptions import (
    NetworkError,
    ParseError,
    RateLimitError,
    ServiceUnavailableError,
)
from search_aggregator.infrastructure.sources.base_client import BaseAPIClient


class _Client(BaseAPIClient):
    _service_name = "Test"


@pytest.fixture
def client():
    c = _Client(base_url="https://api.example.com/", timeout=2.0)
    c._client = AsyncMock()
    return c


# ============================================================
# _fetch
# ============================================================


class TestFetch:
    async def test_json_success(self, client, response_factory):
        client._client.get = AsyncMock(return_value=response_factory(json_data={"ok": True}))
        assert await client._fetch("/search") == {"ok": True}
        client._client.get.assert_awaited_once_with("https://api.example.com/search", headers={})

    async def test_full_url_passthrough(self, client, response_factory):
        client._client.get = AsyncMock(return_value=response_factory(json_data={}))
        await client._fetch("https://other.example.org/x")
        assert client._client.get.call_args.args[0] == "https://other.example.org/x"

    async def test_text_response(self, client, response_factory):
        response = response_factory()
        response.text = "plain"
        client._client.get = AsyncMock(return_value=response)
        assert await client._fetch("/x", expect_json=False) == "plain"

    async def test_rate_limit(self, client, response_factory):
        client._client.get = AsyncMock(
            return_value=response_factory(429, headers={"Retry-After": "30"}, reason="Too Many Requests")
        )
        with pytest.raises(RateLimitError) as exc_info:
            await client._fetch("/x")
        assert exc_info.value.service == "Test"
        assert exc_info.value.context.retry_after == 30.0

    async def test_server_error(self, client, response_factory):
        client._client.get = AsyncMock(return_value=response_factory(503, reason="Service Unavailable"))
        with pytest.raises(ServiceUnavailableError) as exc_info:
            await client._fetch("/x")
        assert exc_info.value.status_code == 503

    async def test_client_error(self, client, response_factory):
        client._client.get = AsyncMock(return_value=response_factory(404, reason="Not Found"))
        with pytest.raises(NetworkError, match="HTTP 404"):
            await client._fetch("/x")

    async def test_timeout(self, client):
        client._client.get = AsyncMock(side_effect=httpx.ReadTimeout("slow", request=MagicMock()))
        with pytest.raises(NetworkError, match="timeout after 2.0s"):
            await client._fetch("/x")

    async def test_connect_error(self, client):
        client._client.get = AsyncMock(side_effect=httpx.ConnectError("DNS failed", request=MagicMock()))
        with pytest.raises(NetworkError, match="connection failed"):
            await client._fetch("/x")

    async def test_invalid_json(self, client, response_factory):
        response = response_factory()
        response.json.side_effect = ValueError("Expecting value")
        client._client.get = AsyncMock(return_value=response)
        with pytest.raises(ParseError):
            await client._fetch("/x")


# ============================================================
# _make_request
# ============================================================


class TestMakeRequest:
    async def test_success(self, client, response_factory):
        client._client.get = AsyncMock(return_value=response_factory(json_data={"hits": []}))
        assert await client._make_request("/x") == {"hits": []}

    @pytest.mark.parametrize("status", [404, 429, 500])
    async def test_error_status_returns_none(self, client, response_factory, status):
        client._client.get = AsyncMock(return_value=response_factory(status))
        assert await client._make_request("/x") is None

    async def test_transport_error_returns_none(self, client):
        client._client.get = AsyncMock(side_effect=httpx.ConnectError("refused", request=MagicMock()))
        assert await client._make_request("/x") is None

    async def test_unexpected_error_returns_none(self, client):
        client._client.get = AsyncMock(side_effect=RuntimeError("boom"))
        assert await client._make_request("/x") is None

    async def test_no_retry(self, client, response_factory):
        client._client.get = AsyncMock(return_value=response_factory(503))
        await client._make_request("/x")
        assert client._client.get.await_count == 1


class TestLifecycle:
    async def test_search_not_implemented(self):
        async with _Client() as c:
            with pytest.raises(NotImplementedError):
                await c.search("x")

    async def test_close(self, client):
        await client.close()
        client._client.aclose.assert_awaited_once()

    def test_retry_after_invalid(self, response_factory):
        assert BaseAPIClient._get_retry_after(response_factory(headers={"Retry-After": "soon"})) is None
