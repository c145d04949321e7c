"""Source protocol shared by the JSON and spreadsheet adapters.

An adapter turns one external representation of the standard into raw
records: plain dicts keyed by the entity field names of
``pwls.catalog.models`` (``company_code``, ``short_mnemonic``, ...).
Property records additionally carry ``parent``, an identifier in the
adapter's ``parent_scheme``.  Every failure while reading is raised as
``SourceError`` so the loader can contain it per entity type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pwls.catalog.crossref import CurveLink
    from pwls.catalog.hierarchy import ParentScheme


# Entity type -> JSON document name, in load order
FILE_NAMES = {
    "properties": "properties.json",
    "companies": "companies.json",
    "logging_methods": "loggingMethods.json",
    "tool_classes": "toolClasses.json",
    "tools": "tools.json",
    "curves": "curves.json",
    "curve_links": "curvesByTool.json",
}


class SourceError(Exception):
    """A source document could not be read or has an unusable shape."""


class Source(Protocol):
    parent_scheme: ParentScheme

    def describe(self) -> str:
        ...

    def properties(self) -> list[dict]:
        ...

    def companies(self) -> list[dict]:
        ...

    def logging_methods(self) -> list[dict]:
        ...

    def tool_classes(self) -> list[dict]:
        ...

    def tools(self) -> list[dict]:
        ...

    def curves(self) -> list[dict]:
        ...

    def curve_links(self) -> list[CurveLink]:
        ...
