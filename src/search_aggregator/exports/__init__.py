"""
Exports Module - Download formats for ranked search results.

Provides:
- Result export in multiple formats (JSON, CSV, XML, XLSX)
"""

from .formats import (
    COLUMNS,
    MEDIA_TYPES,
    SHEET_TITLE,
    SUPPORTED_FORMATS,
    escape_xml,
    export_csv,
    export_json,
    export_results,
    export_xlsx,
    export_xml,
)

__all__ = [
    "COLUMNS",
    "MEDIA_TYPES",
    "SHEET_TITLE",
    "SUPPORTED_FORMATS",
    "escape_xml",
    "export_csv",
    "export_json",
    "export_results",
    "export_xlsx",
    "export_xml",
]
