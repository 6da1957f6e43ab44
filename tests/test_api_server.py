"""Tests for the HTTP API (FastAPI TestClient)."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from search_aggregator.api.server import create_app
from search_aggregator.application.search import SearchAggregator
from search_aggregator.core.exceptions import NetworkError
from search_aggregator.infrastructure.cache import ResultCache

MISSING_QUERY = 'Query parameter "q" is required'


@pytest.fixture
def sources(source_factory, wiki_result, hn_result, book_result, repo_result):
    return [
        source_factory([wiki_result], name="Wikipedia"),
        source_factory([hn_result], name="HackerNews"),
        source_factory([book_result], name="OpenLibrary"),
        source_factory([repo_result], name="GitHub"),
    ]


@pytest.fixture
def aggregator(sources, clock):
    return SearchAggregator(sources, ResultCache(clock=clock), clock=clock)


@pytest.fixture
def test_client(aggregator):
    with TestClient(create_app(aggregator=aggregator)) as client:
        yield client


# ============================================================
# /search
# ============================================================


class TestSearchEndpoint:
    @pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
    def test_missing_query(self, test_client, sources, params):
        response = test_client.get("/search", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": MISSING_QUERY}
        for source in sources:
            source.search.assert_not_called()

    def test_success(self, test_client, clock):
        response = test_client.get("/search", params={"q": "python"})

        assert response.status_code == 200
        body = response.json()
        assert body["query"] == "python"
        assert body["cached"] is False
        assert body["timestamp"] == clock.now
        assert len(body["results"]) == 4
        assert set(body["results"][0]) == {"id", "source", "title", "snippet", "score", "url", "metadata"}

        scores = [r["score"] for r in body["results"]]
        assert scores == sorted(scores, reverse=True)

    def test_metadata_wire_keys(self, test_client):
        body = test_client.get("/search", params={"q": "python"}).json()
        by_source = {r["source"]: r["metadata"] for r in body["results"]}
        assert by_source["hackernews"]["numComments"] == 80
        assert by_source["openlibrary"]["editionCount"] == 4
        assert by_source["openlibrary"]["authors"] == ["Mark Lutz"]
        assert by_source["github"]["stars"] == 60000

    def test_second_request_cached(self, test_client, sources):
        test_client.get("/search", params={"q": "Python"})
        response = test_client.get("/search", params={"q": " python "})

        assert response.json()["cached"] is True
        assert sources[0].search.await_count == 1

    def test_provider_failure_still_200(self, test_client, sources):
        sources[3].search.side_effect = NetworkError("GitHub: connection failed")

        response = test_client.get("/search", params={"q": "python"})

        assert response.status_code == 200
        assert {r["source"] for r in response.json()["results"]} == {"wikipedia", "hackernews", "openlibrary"}

    def test_aggregation_failure_500(self, sources, clock):
        ranker = MagicMock(side_effect=RuntimeError("ranking exploded"))
        aggregator = SearchAggregator(sources, ResultCache(clock=clock), clock=clock, ranker=ranker)

        with TestClient(create_app(aggregator=aggregator)) as client:
            response = client.get("/search", params={"q": "python"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "An error occurred while searching",
            "details": "ranking exploded",
        }

    def test_unexpected_failure_500(self):
        aggregator = MagicMock()
        aggregator.sources = []
        aggregator.aggregate = AsyncMock(side_effect=KeyError("boom"))
        aggregator.close = AsyncMock()

        with TestClient(create_app(aggregator=aggregator), raise_server_exceptions=False) as client:
            response = client.get("/search", params={"q": "python"})

        assert response.status_code == 500
        assert response.json()["error"] == "An error occurred while searching"
        assert "boom" in response.json()["details"]

    def test_api_prefix(self, test_client):
        response = test_client.get("/api/search", params={"q": "python"})
        assert response.status_code == 200
        assert len(response.json()["results"]) == 4


# ============================================================
# /export
# ============================================================


class TestExportEndpoint:
    def test_json_download(self, test_client):
        response = test_client.get("/export", params={"q": "python", "format": "json"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="search-results-')
        assert disposition.endswith('.json"')
        assert json.loads(response.text)["count"] == 4

    def test_csv_download(self, test_client):
        response = test_client.get("/api/export", params={"q": "python", "format": "csv"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.splitlines()[0] == "Source,Title,Description,Score,URL"

    def test_xlsx_download(self, test_client):
        response = test_client.get("/export", params={"q": "python", "format": "xlsx"})

        assert response.status_code == 200
        assert response.content[:2] == b"PK"

    def test_unknown_format(self, test_client, sources):
        response = test_client.get("/export", params={"q": "python", "format": "pdf"})

        assert response.status_code == 400
        assert "format" in response.json()["error"]
        sources[0].search.assert_not_called()

    def test_missing_query(self, test_client):
        response = test_client.get("/export", params={"format": "csv"})
        assert response.status_code == 400
        assert response.json() == {"error": MISSING_QUERY}

    def test_reuses_search_cache(self, test_client, sources):
        test_client.get("/search", params={"q": "python"})
        test_client.get("/export", params={"q": "python", "format": "xml"})
        assert sources[0].search.await_count == 1


# ============================================================
# /health, CORS, lifecycle
# ============================================================


class TestHealth:
    @pytest.mark.parametrize("path", ["/health", "/api/health"])
    def test_health(self, test_client, path):
        response = test_client.get(path)
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert isinstance(body["timestamp"], int)


class TestCors:
    def test_allow_any_origin(self, test_client):
        response = test_client.get("/health", headers={"Origin": "http://localhost:3000"})
        assert response.headers["access-control-allow-origin"] == "*"

    def test_preflight(self, test_client):
        response = test_client.options(
            "/search",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestLifecycle:
    def test_shutdown_closes_sources(self, aggregator, sources):
        with TestClient(create_app(aggregator=aggregator)):
            pass
        for source in sources:
            source.close.assert_awaited_once()

    def test_builds_from_settings(self):
        from search_aggregator.config import Settings

        app = create_app(settings=Settings(cache_ttl_seconds=60))
        aggregator = app.state.aggregator
        assert aggregator.cache.ttl_ms == 60_000
        assert len(aggregator.sources) == 4
