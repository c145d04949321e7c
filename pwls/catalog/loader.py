"""Catalog loader: builds the collections from a source, step by step.

Raw records from an adapter are turned into entities one at a time.  A
record that fails construction is skipped (warning recorded), a source
document that cannot be read leaves its collection empty (warning
recorded).  Nothing raised by a source escapes ``load_collections``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from pwls.ingest.base import Source, SourceError

from .collections import Companies, Curves, LoggingMethods, Properties, ToolClasses, Tools
from .crossref import SOURCE as LINKS_SOURCE, link_curves
from .hierarchy import ParentRef, ParentScheme, find_cycles, resolve_parents
from .models import (
    CatalogWarning, Company, Curve, LoadReport, LoggingMethod, Property, Tool, ToolClass,
)


log = logging.getLogger("pwls.catalog.loader")


@dataclass
class LoadedCollections:
    properties: Properties = field(default_factory=Properties)
    companies: Companies = field(default_factory=Companies)
    logging_methods: LoggingMethods = field(default_factory=LoggingMethods)
    tool_classes: ToolClasses = field(default_factory=ToolClasses)
    tools: Tools = field(default_factory=Tools)
    curves: Curves = field(default_factory=Curves)

    def seal(self) -> None:
        for c in (self.properties, self.companies, self.logging_methods,
                  self.tool_classes, self.tools, self.curves):
            c.seal()

    def counts(self) -> dict[str, int]:
        return {
            "properties": len(self.properties),
            "companies": len(self.companies),
            "logging_methods": len(self.logging_methods),
            "tool_classes": len(self.tool_classes),
            "tools": len(self.tools),
            "curves": len(self.curves),
        }


# ── Record → entity ────────────────────────────────────────────────

def _record_key(record: dict, *fields: str) -> str:
    parts = [str(record.get(f)) for f in fields if record.get(f) is not None]
    return "/".join(parts) or "?"


def _build(records: Iterable[dict], factory: Callable[[dict], object], collection,
           source: str, key_fields: tuple[str, ...],
           warnings: list[CatalogWarning]) -> None:
    """Construct and add each record, skipping the ones that fail."""
    for record in records:
        try:
            entity = factory(record)
            kept = collection.add(entity)
        except (KeyError, TypeError, ValueError) as exc:
            key = _record_key(record, *key_fields)
            log.warning("Skipping %s entry %s: %s", source, key, exc)
            warnings.append(CatalogWarning(source, key, f"Missing/invalid field: {exc}"))
        else:
            if kept is not entity and not collection.replace_duplicates:
                key = _record_key(record, *key_fields)
                warnings.append(CatalogWarning(source, key, "Duplicate entry ignored, keeping the first one"))
    log.info("Read %d %s", len(collection), source)


def build_companies(records: Iterable[dict], warnings: list[CatalogWarning]) -> Companies:
    companies = Companies()
    _build(records, lambda r: Company(code=r["code"], name=r["name"]),
           companies, "companies", ("code",), warnings)
    return companies


def build_logging_methods(records: Iterable[dict], warnings: list[CatalogWarning]) -> LoggingMethods:
    methods = LoggingMethods()
    _build(records, lambda r: LoggingMethod(name=r["name"], description=r["description"]),
           methods, "loggingMethods", ("name",), warnings)
    return methods


def build_tool_classes(records: Iterable[dict], warnings: list[CatalogWarning]) -> ToolClasses:
    tool_classes = ToolClasses()
    _build(records, lambda r: ToolClass(name=r["name"], description=r["description"]),
           tool_classes, "toolClasses", ("name",), warnings)
    return tool_classes


def _parse_tool(r: dict) -> Tool:
    return Tool(
        code=r["code"],
        company_code=r.get("company_code"),
        group=r.get("group"),
        marketing_name=r.get("marketing_name"),
        description=r.get("description"),
        generic_type=r.get("generic_type"),
        logging_method=r.get("logging_method"),
        type_description=r.get("type_description"),
    )


def build_tools(records: Iterable[dict], warnings: list[CatalogWarning]) -> Tools:
    tools = Tools()
    _build(records, _parse_tool, tools, "tools", ("code", "company_code"), warnings)
    return tools


def _parse_curve(r: dict) -> Curve:
    return Curve(
        mnemonic=r["mnemonic"],
        property=r["property"],
        quantity=r["quantity"],
        short_mnemonic=r.get("short_mnemonic"),
        company_code=r.get("company_code"),
        description=r.get("description"),
    )


def build_curves(records: Iterable[dict], warnings: list[CatalogWarning]) -> Curves:
    curves = Curves()
    _build(records, _parse_curve, curves, "curves", ("mnemonic", "company_code"), warnings)
    return curves


def build_properties(records: Iterable[dict], scheme: ParentScheme,
                     warnings: list[CatalogWarning]) -> Properties:
    """Construct properties, then link them into their hierarchy."""
    properties = Properties()
    pending: dict[Property, ParentRef] = {}

    def parse(r: dict) -> Property:
        prop = Property(
            name=r["name"],
            description=r["description"],
            quantity=r["quantity"],
            guid=r["guid"],
            sort_order=r.get("sort_order"),
            is_abstract=r.get("is_abstract") or False,
        )
        pending[prop] = ParentRef(r.get("parent"), scheme)
        return prop

    _build(records, parse, properties, "properties", ("guid", "name"), warnings)

    # Parents may appear after their children, so resolve once all exist
    warnings.extend(resolve_parents(properties, pending))
    warnings.extend(find_cycles(properties))
    return properties


# ── Public API ─────────────────────────────────────────────────────

def load_collections(source: Source) -> tuple[LoadedCollections, LoadReport]:
    """Read every entity type from ``source`` in dependency order.

    Properties, companies, logging methods, tool classes, tools and
    curves are each loaded on their own; a failing source document
    leaves only that collection empty.  The tool/curve cross-reference
    runs last against whatever tools and curves were loaded.
    """
    where = source.describe()
    report = LoadReport(location=where)
    warnings = report.warnings
    loaded = LoadedCollections()

    def read(label: str, reader: Callable[[], list]) -> list:
        try:
            return reader()
        except SourceError as exc:
            msg = f"Unable to read {label}. Continue without: {exc}"
            log.warning("%s", msg)
            warnings.append(CatalogWarning(label, where, msg))
            return []

    loaded.properties = build_properties(
        read("properties", source.properties), source.parent_scheme, warnings)
    loaded.companies = build_companies(read("companies", source.companies), warnings)
    loaded.logging_methods = build_logging_methods(
        read("loggingMethods", source.logging_methods), warnings)
    loaded.tool_classes = build_tool_classes(read("toolClasses", source.tool_classes), warnings)
    loaded.tools = build_tools(read("tools", source.tools), warnings)
    loaded.curves = build_curves(read("curves", source.curves), warnings)

    links = read(LINKS_SOURCE, source.curve_links)
    warnings.extend(link_curves(loaded.tools, loaded.curves, links))

    loaded.seal()
    report.counts = loaded.counts()
    log.info("Catalog loaded from %s: %s (%d warnings)", where, report.counts, len(warnings))
    return loaded, report
