"""Ingestion adapters: turn PWLS documents into raw catalog records."""

from __future__ import annotations

from pathlib import Path

from .base import FILE_NAMES, Source, SourceError
from .excel_source import ExcelSource
from .json_source import JsonSource, is_url


def open_source(location: str | Path, properties_workbook: str | Path | None = None,
                timeout: float | None = None) -> Source:
    """Pick the adapter for a location.

    ``.xlsx`` files are read as the logs workbook (plus an optional
    properties workbook); URLs and folders as JSON documents.
    """
    if not is_url(location) and str(location).lower().endswith(".xlsx"):
        return ExcelSource(location, properties_workbook)
    return JsonSource(location, timeout=timeout)


__all__ = [
    "FILE_NAMES", "Source", "SourceError",
    "ExcelSource", "JsonSource", "is_url", "open_source",
]
