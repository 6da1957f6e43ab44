"""
Export Formats - Serialize ranked search results for download.

Supported formats:
- JSON: Programmatic access (includes provider metadata)
- CSV: Excel, data analysis
- XML: Interchange with XML tooling
- XLSX: Spreadsheet (openpyxl)

Exports only serialize; ranking and caching happen before this module.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from xml.sax.saxutils import escape

from openpyxl import Workbook
from openpyxl.styles import Font

from search_aggregator.core.exceptions import InvalidParameterError
from search_aggregator.models import SearchResult

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ["json", "csv", "xml", "xlsx"]

MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv; charset=utf-8",
    "xml": "application/xml; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

COLUMNS = ["Source", "Title", "Description", "Score", "URL"]
SHEET_TITLE = "Search Results"

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def _export_date(now: datetime | None) -> str:
    moment = now or datetime.now(timezone.utc)
    return moment.isoformat().replace("+00:00", "Z")


def _row(result: SearchResult) -> list[str | float]:
    return [result.source.value, result.title, result.snippet, result.score, result.url]


def escape_xml(text: str) -> str:
    """Escape the five predefined XML entities (& < > " ')."""
    return escape(text, _XML_ENTITIES)


def export_json(results: Sequence[SearchResult], now: datetime | None = None) -> str:
    """
    Export results to pretty-printed JSON.

    Args:
        results: Ranked results
        now: Export timestamp (defaults to current UTC time)

    Returns:
        JSON document with exportDate, count and results
    """
    data = {
        "exportDate": _export_date(now),
        "count": len(results),
        "results": [
            {
                "source": r.source.value,
                "title": r.title,
                "snippet": r.snippet,
                "score": r.score,
                "url": r.url,
                "metadata": r.metadata.to_dict() if r.metadata else {},
            }
            for r in results
        ],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def export_csv(results: Sequence[SearchResult]) -> str:
    """
    Export results to CSV.

    Fields containing a comma, quote or line break are quote-wrapped with
    inner quotes doubled.

    Returns:
        CSV string with a header row
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(COLUMNS)
    for result in results:
        writer.writerow(_row(result))
    return output.getvalue()


def export_xml(results: Sequence[SearchResult], now: datetime | None = None) -> str:
    """
    Export results to XML.

    Returns:
        UTF-8 XML document rooted at <searchResults>
    """
    items = "\n".join(
        "  <result>\n"
        f"    <source>{escape_xml(r.source.value)}</source>\n"
        f"    <title>{escape_xml(r.title)}</title>\n"
        f"    <snippet>{escape_xml(r.snippet)}</snippet>\n"
        f"    <score>{r.score}</score>\n"
        f"    <url>{escape_xml(r.url)}</url>\n"
        "  </result>"
        for r in results
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<searchResults exportDate="{_export_date(now)}" count="{len(results)}">\n'
        f"{items}\n"
        "</searchResults>"
    )


def export_xlsx(results: Sequence[SearchResult]) -> bytes:
    """
    Export results to an Excel workbook.

    Returns:
        XLSX file content with a single "Search Results" sheet
    """
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append(COLUMNS)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for result in results:
        ws.append(_row(result))

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output.getvalue()


def export_results(results: Sequence[SearchResult], format: str = "json") -> str | bytes:
    """
    Export results to the specified format.

    Args:
        results: Ranked results
        format: One of json, csv, xml, xlsx (case-insensitive)

    Returns:
        Text for json/csv/xml, bytes for xlsx

    Raises:
        InvalidParameterError: If format is not supported
    """
    format = format.lower()

    if format not in SUPPORTED_FORMATS:
        raise InvalidParameterError("format", format, f"one of {', '.join(SUPPORTED_FORMATS)}")

    logger.debug(f"Exporting {len(results)} results as {format}")

    if format == "json":
        return export_json(results)
    elif format == "csv":
        return export_csv(results)
    elif format == "xml":
        return export_xml(results)
    return export_xlsx(results)
