"""Catalog: the loaded PWLS model and its filtered queries.

Usage:
    catalog = Catalog.load("https://raw.githubusercontent.com/geosoft-as/pwls/main/json")
    catalog = Catalog.load(Path("pwls/json"))           # local folder
    gr = catalog.get_curves(mnemonic="GR", company_code=440)

Every query scans its collection and returns a new set of the entities
matching all supplied filters.  A filter left at None matches anything.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, TypeVar

from .collections import Companies, Curves, LoggingMethods, Properties, ToolClasses, Tools
from .loader import LoadedCollections, load_collections
from .models import (
    CatalogWarning, Company, Curve, LoadReport, LoggingMethod, Property, Tool, ToolClass,
)


log = logging.getLogger("pwls.catalog")

E = TypeVar("E")


def _select(entities: Iterable[E], **filters) -> set[E]:
    active = {name: value for name, value in filters.items() if value is not None}
    return {
        e for e in entities
        if all(getattr(e, name) == value for name, value in active.items())
    }


class Catalog:
    """Read-only view over the six PWLS collections."""

    def __init__(self, collections: LoadedCollections | None = None,
                 report: LoadReport | None = None):
        c = collections or LoadedCollections()
        self.properties: Properties = c.properties
        self.companies: Companies = c.companies
        self.logging_methods: LoggingMethods = c.logging_methods
        self.tool_classes: ToolClasses = c.tool_classes
        self.tools: Tools = c.tools
        self.curves: Curves = c.curves
        self.report = report or LoadReport(location="", counts=c.counts())

    @classmethod
    def from_source(cls, source) -> Catalog:
        collections, report = load_collections(source)
        return cls(collections, report)

    @classmethod
    def load(cls, location: str | Path, properties_workbook: str | Path | None = None,
             timeout: float | None = None) -> Catalog:
        """Build the catalog from a base URL, a JSON folder or a logs workbook.

        Missing or malformed documents leave their collection empty and
        are listed in ``report.warnings``; this never raises for them.
        """
        if location is None:
            raise ValueError("location cannot be None")

        from pwls.ingest import open_source

        log.info("Initializing PWLS catalog from %s", location)
        catalog = cls.from_source(open_source(location, properties_workbook, timeout))
        log.info("PWLS catalog is ready.")
        return catalog

    @property
    def warnings(self) -> list[CatalogWarning]:
        return self.report.warnings

    # ── Queries ────────────────────────────────────────────────────

    def get_properties(self, name: str | None = None,
                       quantity: str | None = None) -> set[Property]:
        return _select(self.properties, name=name, quantity=quantity)

    def get_companies(self, code: int | None = None) -> set[Company]:
        return _select(self.companies, code=code)

    def get_logging_methods(self, name: str | None = None) -> set[LoggingMethod]:
        return _select(self.logging_methods, name=name)

    def get_tool_classes(self, name: str | None = None) -> set[ToolClass]:
        return _select(self.tool_classes, name=name)

    def get_tools(self, code: str | None = None,
                  company_code: int | None = None,
                  group: str | None = None,
                  generic_type: str | None = None,
                  logging_method: str | None = None) -> set[Tool]:
        return _select(self.tools, code=code, company_code=company_code, group=group,
                       generic_type=generic_type, logging_method=logging_method)

    def get_curves(self, mnemonic: str | None = None,
                   company_code: int | None = None,
                   property: str | None = None,
                   quantity: str | None = None) -> set[Curve]:
        return _select(self.curves, mnemonic=mnemonic, company_code=company_code,
                       property=property, quantity=quantity)

    def __repr__(self) -> str:
        return f"Catalog({self.report.location!r}, {self.report.counts})"


def load_catalog(source, properties_workbook: str | Path | None = None,
                 timeout: float | None = None) -> Catalog:
    """Build a Catalog from an opened ``Source`` or from a location.

    Locations go through ``Catalog.load``; anything carrying a
    ``parent_scheme`` is used as a source directly.
    """
    if hasattr(source, "parent_scheme"):
        return Catalog.from_source(source)
    return Catalog.load(source, properties_workbook, timeout)
