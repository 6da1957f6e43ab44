"""Tests for export formats."""

from __future__ import annotations

import csv
import io
import json
from datetime import datetime, timezone

import defusedxml.ElementTree as ET
import pytest
from openpyxl import load_workbook

from search_aggregator.core.exceptions import InvalidParameterError
from search_aggregator.exports import (
    COLUMNS,
    SHEET_TITLE,
    escape_xml,
    export_csv,
    export_json,
    export_results,
    export_xlsx,
    export_xml,
)
from search_aggregator.models import SearchResult, Source

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def tricky_result():
    return SearchResult(
        id="hackernews-9",
        source=Source.HACKERNEWS,
        title='Say "hi", <world> & friends',
        snippet="line one\nline two, 'quoted'",
        url="https://example.com/?a=1&b=2",
        score=42.5,
    )


class TestEscapeXml:
    def test_all_entities(self):
        assert escape_xml("<a href=\"x\">'&'</a>") == (
            "&lt;a href=&quot;x&quot;&gt;&apos;&amp;&apos;&lt;/a&gt;"
        )


class TestJson:
    def test_shape(self, sample_results):
        data = json.loads(export_json(sample_results, now=NOW))
        assert data["exportDate"] == "2024-03-01T12:00:00Z"
        assert data["count"] == 4
        assert data["results"][0]["source"] == "wikipedia"
        assert data["results"][3]["metadata"]["stars"] == 60000
        assert set(data["results"][0]) == {"source", "title", "snippet", "score", "url", "metadata"}

    def test_empty(self):
        data = json.loads(export_json([], now=NOW))
        assert data["count"] == 0
        assert data["results"] == []


class TestCsv:
    def test_header(self):
        assert export_csv([]) == "Source,Title,Description,Score,URL\n"

    def test_quoting_round_trip(self, tricky_result):
        output = export_csv([tricky_result])
        assert '"Say ""hi"", <world> & friends"' in output

        rows = list(csv.reader(io.StringIO(output)))
        assert rows[0] == COLUMNS
        assert rows[1] == [
            "hackernews",
            'Say "hi", <world> & friends',
            "line one\nline two, 'quoted'",
            "42.5",
            "https://example.com/?a=1&b=2",
        ]

    def test_plain_fields_unquoted(self, repo_result):
        line = export_csv([repo_result]).splitlines()[1]
        assert line.startswith("github,python/cpython,")


class TestXml:
    def test_parses_and_escapes(self, tricky_result):
        document = export_xml([tricky_result], now=NOW)
        assert document.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert "&lt;world&gt; &amp; friends" in document

        root = ET.fromstring(document.encode("utf-8"))
        assert root.tag == "searchResults"
        assert root.get("count") == "1"
        assert root.get("exportDate") == "2024-03-01T12:00:00Z"
        item = root.find("result")
        assert item.findtext("title") == 'Say "hi", <world> & friends'
        assert item.findtext("url") == "https://example.com/?a=1&b=2"
        assert item.findtext("score") == "42.5"


class TestXlsx:
    def test_workbook(self, sample_results):
        content = export_xlsx(sample_results)
        wb = load_workbook(io.BytesIO(content))
        ws = wb.active

        assert ws.title == SHEET_TITLE
        assert [c.value for c in ws[1]] == COLUMNS
        assert ws["A1"].font.bold
        assert ws.max_row == 5
        assert ws["B2"].value == sample_results[0].title


class TestExportResults:
    @pytest.mark.parametrize("fmt, kind", [("json", str), ("CSV", str), ("xml", str), ("xlsx", bytes)])
    def test_dispatch(self, sample_results, fmt, kind):
        assert isinstance(export_results(sample_results, fmt), kind)

    def test_unknown_format(self, sample_results):
        with pytest.raises(InvalidParameterError, match="format"):
            export_results(sample_results, "pdf")
