"""Catalog serialization: convert entities to JSON-safe dicts and files.

Field names follow the PWLS JSON documents, so ``dump_catalog`` output
can be loaded again with ``JsonSource``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pwls.ingest.base import FILE_NAMES

from .crossref import CurveLink
from .models import Company, Curve, LoggingMethod, Property, Tool, ToolClass


log = logging.getLogger("pwls.catalog.serialization")


def company_to_dict(c: Company) -> dict:
    return {"code": c.code, "name": c.name}


def logging_method_to_dict(m: LoggingMethod) -> dict:
    return {"name": m.name, "description": m.description}


def tool_class_to_dict(t: ToolClass) -> dict:
    return {"name": t.name, "description": t.description}


def property_to_dict(p: Property) -> dict:
    """Serialize a Property; the parent is referenced by name."""
    return {
        "name": p.name,
        "description": p.description,
        "quantity": p.quantity,
        "guid": p.guid,
        "parent": p.parent.name if p.parent is not None else None,
        "sortOrder": p.sort_order,
        "isAbstract": p.is_abstract,
    }


def curve_to_dict(c: Curve) -> dict:
    return {
        "mnemonic": c.mnemonic,
        "shortMnemonic": c.short_mnemonic,
        "companyCode": c.company_code,
        "property": c.property,
        "quantity": c.quantity,
        "description": c.description,
    }


def tool_to_dict(t: Tool) -> dict:
    return {
        "toolCode": t.code,
        "companyCode": t.company_code,
        "group": t.group,
        "marketingName": t.marketing_name,
        "description": t.description,
        "genericType": t.generic_type,
        "loggingMethod": t.logging_method,
        "typeDescription": t.type_description,
        "curves": sorted(c.mnemonic for c in t.curves),
    }


def curve_link_to_dict(link: CurveLink) -> dict:
    # The document format has one company column for both sides
    return {
        "toolCode": link.tool_code,
        "companyCode": link.tool_company_code,
        "curveMnemonic": link.curve_mnemonic,
    }


_SERIALIZERS = {
    Company: (company_to_dict, lambda c: (c.code,)),
    LoggingMethod: (logging_method_to_dict, lambda m: (m.name,)),
    ToolClass: (tool_class_to_dict, lambda t: (t.name,)),
    Property: (property_to_dict, lambda p: (p.sort_order is None, p.sort_order or 0, p.name)),
    Curve: (curve_to_dict, lambda c: (c.mnemonic, c.company_code is None, c.company_code or 0)),
    Tool: (tool_to_dict, lambda t: (t.code, t.company_code is None, t.company_code or 0)),
    CurveLink: (curve_link_to_dict, lambda link: (link.tool_code, link.curve_mnemonic, link.tool_company_code or 0)),
}


def entity_to_dict(entity: Any) -> dict:
    try:
        to_dict, _ = _SERIALIZERS[type(entity)]
    except KeyError:
        raise TypeError(f"Cannot serialize {type(entity).__name__}") from None
    return to_dict(entity)


def entities_to_list(entities: Iterable[Any]) -> list[dict]:
    """Serialize entities of one type, sorted by their natural key."""
    items = list(entities)
    if not items:
        return []
    kind = type(items[0])
    if kind not in _SERIALIZERS:
        raise TypeError(f"Cannot serialize {kind.__name__}")
    to_dict, sort_key = _SERIALIZERS[kind]
    return [to_dict(e) for e in sorted(items, key=sort_key)]


def catalog_to_dict(catalog) -> dict:
    """Summary of a loaded Catalog for the web API / CLI."""
    report = catalog.report
    return {
        "ok": report.ok,
        "location": report.location,
        "counts": dict(report.counts),
        "warnings": [{"source": w.source, "key": w.key, "message": w.message}
                     for w in report.warnings],
    }


def curve_links_of(tools: Iterable[Tool]) -> list[CurveLink]:
    """Flatten tool/curve membership back into link records."""
    return [
        CurveLink(t.code, t.company_code, c.mnemonic, c.company_code)
        for t in tools
        for c in t.curves
    ]


# ── Files ──────────────────────────────────────────────────────────

def save_json(path: Path, entities: Iterable[Any]) -> Path:
    """Write entities as a pretty-printed JSON array (UTF-8)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(entities_to_list(entities), indent=2, ensure_ascii=False) + "\n",
                    encoding="utf-8")
    return path


def dump_catalog(catalog, folder: Path) -> list[Path]:
    """Write all entity documents in the layout JsonSource reads."""
    folder = Path(folder)
    documents = {
        "properties": catalog.properties,
        "companies": catalog.companies,
        "logging_methods": catalog.logging_methods,
        "tool_classes": catalog.tool_classes,
        "tools": catalog.tools,
        "curves": catalog.curves,
        "curve_links": curve_links_of(catalog.tools),
    }
    written = []
    for entity, items in documents.items():
        path = save_json(folder / FILE_NAMES[entity], items)
        log.info("Wrote %s", path)
        written.append(path)
    return written
