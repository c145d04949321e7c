"""Spreadsheet source: the PWLS .xlsx workbooks.

The standard ships two workbooks: a logs workbook (companies, logging
methods, tool classes, tools, curves and curves within tools, one sheet
each) and a properties workbook.  The first row of every sheet is a
header.  Parents of properties are given by GUID (column K).
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from pwls.catalog.crossref import CurveLink
from pwls.catalog.hierarchy import ParentScheme

from .base import SourceError


log = logging.getLogger("pwls.ingest.excel")

SHEET_COMPANIES = "Company Codes"
SHEET_LOGGING_METHODS = "Logging Method"
SHEET_TOOL_CLASSES = "Well Log Tool Class"
SHEET_TOOLS = "Tools"
SHEET_CURVES = "Curves"
SHEET_CURVE_LINKS = "Curves Within Tools"
SHEET_PROPERTIES = "Properties"


# ── Cell conversion ────────────────────────────────────────────────

def _cell(row: tuple, index: int):
    return row[index] if index < len(row) else None


def cell_text(value) -> str | None:
    """Trimmed text of a cell, None for empty cells."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def cell_int(value) -> int | None:
    """Integer value of a cell, None (with a warning) if it has none."""
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(float(text))
    except ValueError:
        log.warning('Non-integer: "%s"', text)
        return None


def cell_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return (cell_text(value) or "").lower() == "true"


# ── Source ─────────────────────────────────────────────────────────

class ExcelSource:
    parent_scheme = ParentScheme.GUID

    def __init__(self, logs_workbook: str | Path, properties_workbook: str | Path | None = None):
        if logs_workbook is None:
            raise ValueError("logs_workbook cannot be None")
        self.logs_workbook = Path(logs_workbook)
        self.properties_workbook = Path(properties_workbook) if properties_workbook else None
        self._workbooks: dict[Path, dict[str, list[tuple]] | SourceError] = {}

    def describe(self) -> str:
        if self.properties_workbook is None:
            return str(self.logs_workbook)
        return f"{self.logs_workbook} + {self.properties_workbook}"

    def _sheets(self, path: Path) -> dict[str, list[tuple]]:
        """Open ``path`` once and keep the non-empty data rows of every sheet."""
        cached = self._workbooks.get(path)
        if isinstance(cached, SourceError):
            raise SourceError(str(cached)) from cached
        if cached is not None:
            return cached

        log.info("Opening workbook %s", path)
        try:
            wb = load_workbook(filename=path, read_only=True, data_only=True)
        except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError) as exc:
            error = SourceError(f"Unable to open workbook {path}: {exc}")
            self._workbooks[path] = error
            raise error from exc

        try:
            sheets = {
                ws.title: [
                    tuple(row)
                    for row in ws.iter_rows(min_row=2, values_only=True)
                    if any(v is not None and str(v).strip() for v in row)
                ]
                for ws in wb.worksheets
            }
        finally:
            wb.close()

        self._workbooks[path] = sheets
        return sheets

    def read_sheet(self, path: Path, sheet: str) -> list[tuple]:
        """Return the non-empty data rows of a sheet (header skipped)."""
        sheets = self._sheets(path)
        if sheet not in sheets:
            raise SourceError(f'Workbook {path} has no sheet "{sheet}"')
        rows = sheets[sheet]
        log.info('Read %d rows from "%s"', len(rows), sheet)
        return rows

    # ── Records ────────────────────────────────────────────────────

    def properties(self) -> list[dict]:
        if self.properties_workbook is None:
            raise SourceError("No properties workbook configured")

        records = []
        for row in self.read_sheet(self.properties_workbook, SHEET_PROPERTIES):
            sort_order = cell_int(_cell(row, 0))                 # A
            if sort_order is None:
                log.warning('Unexpected sortOrder: "%s". Skip entry.', _cell(row, 0))
                continue
            records.append({
                "sort_order": sort_order,
                "name": cell_text(_cell(row, 1)),                # B
                "description": cell_text(_cell(row, 3)),         # D
                "is_abstract": cell_bool(_cell(row, 4)),         # E
                "quantity": cell_text(_cell(row, 5)),            # F
                "guid": cell_text(_cell(row, 9)),                # J
                "parent": cell_text(_cell(row, 10)),             # K (parent GUID)
            })
        return records

    def companies(self) -> list[dict]:
        records = []
        for row in self.read_sheet(self.logs_workbook, SHEET_COMPANIES):
            code = cell_int(_cell(row, 0))                       # A
            if code is None:
                log.warning("Unexpected company code: %s. Skipping.", _cell(row, 0))
                continue
            name = cell_text(_cell(row, 1))                      # B
            if name is None:
                log.warning("Company name not specified: %s. Skipping entry.", code)
                continue
            records.append({"code": code, "name": name})
        return records

    def _named(self, sheet: str) -> list[dict]:
        return [
            {"name": cell_text(_cell(row, 0)), "description": cell_text(_cell(row, 1))}
            for row in self.read_sheet(self.logs_workbook, sheet)
        ]

    def logging_methods(self) -> list[dict]:
        return self._named(SHEET_LOGGING_METHODS)

    def tool_classes(self) -> list[dict]:
        return self._named(SHEET_TOOL_CLASSES)

    def tools(self) -> list[dict]:
        return [
            {
                "company_code": cell_int(_cell(row, 0)),         # A
                "code": cell_text(_cell(row, 1)),                # B
                "group": cell_text(_cell(row, 2)),               # C
                "marketing_name": cell_text(_cell(row, 3)),      # D
                "description": cell_text(_cell(row, 4)),         # E
                "generic_type": cell_text(_cell(row, 5)),        # F
                "logging_method": cell_text(_cell(row, 6)),      # G
                "type_description": cell_text(_cell(row, 7)),    # H
            }
            for row in self.read_sheet(self.logs_workbook, SHEET_TOOLS)
        ]

    def curves(self) -> list[dict]:
        return [
            {
                "company_code": cell_int(_cell(row, 0)),         # A
                "mnemonic": cell_text(_cell(row, 1)),            # B
                "property": cell_text(_cell(row, 2)),            # C
                "quantity": cell_text(_cell(row, 3)),            # D
                "short_mnemonic": cell_text(_cell(row, 4)),      # E
                "description": cell_text(_cell(row, 5)),         # F
            }
            for row in self.read_sheet(self.logs_workbook, SHEET_CURVES)
        ]

    def curve_links(self) -> list[CurveLink]:
        return [
            CurveLink.same_company(
                cell_text(_cell(row, 1)),                        # B tool code
                cell_text(_cell(row, 2)),                        # C curve mnemonic
                cell_int(_cell(row, 0)),                         # A company code
            )
            for row in self.read_sheet(self.logs_workbook, SHEET_CURVE_LINKS)
        ]
