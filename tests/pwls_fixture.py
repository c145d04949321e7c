"""Small PWLS catalog used across the test suite.

  - 3 companies (10, 20, 440)
  - 6 properties: a 3-level gamma ray branch, one property naming itself
    as parent and one orphan whose parent does not exist
  - 3 tools (T1 exists for two companies), 4 curves (GR for 10, 20 and
    no company, RHOB for 10)
  - curvesByTool with one duplicate link, one unknown tool and one
    unknown curve
"""

from __future__ import annotations

import json
from pathlib import Path

from openpyxl import Workbook

from pwls.ingest.base import FILE_NAMES


def make_documents() -> dict[str, list[dict]]:
    """Raw JSON documents keyed by entity type."""
    return {
        "properties": [
            {"name": "Gamma ray", "description": "Natural radioactivity", "quantity": "api gamma ray",
             "guid": "g1", "parent": None, "sortOrder": 1, "isAbstract": True},
            {"name": "Gamma ray total", "description": "Total gamma ray", "quantity": "api gamma ray",
             "guid": "g2", "parent": "Gamma ray", "sortOrder": 2, "isAbstract": False},
            {"name": "Gamma ray spectral", "description": "Spectral gamma ray", "quantity": "api gamma ray",
             "guid": "g3", "parent": "Gamma ray", "sortOrder": 3, "isAbstract": True},
            {"name": "Potassium", "description": "Potassium concentration", "quantity": "mass per mass",
             "guid": "g4", "parent": "Gamma ray spectral", "sortOrder": 4, "isAbstract": False},
            {"name": "Resistivity", "description": "Electrical resistivity", "quantity": "resistivity",
             "guid": "g5", "parent": "Resistivity", "sortOrder": 5, "isAbstract": False},
            {"name": "Orphan", "description": "Parent is missing", "quantity": "dimensionless",
             "guid": "g6", "parent": "Nonexistent", "sortOrder": 6, "isAbstract": False},
        ],
        "companies": [
            {"code": 10, "name": "Acme Wireline"},
            {"code": 20, "name": "Borehole Services"},
            {"code": 440, "name": "Generic"},
        ],
        "logging_methods": [
            {"name": "Wireline", "description": "Tool run on a cable after drilling"},
            {"name": "LWD", "description": "Logging while drilling"},
        ],
        "tool_classes": [
            {"name": "Gamma Ray", "description": "Measures natural radioactivity"},
            {"name": "Density", "description": "Measures bulk density"},
        ],
        "tools": [
            {"code": "T1", "companyCode": 10, "group": "GR-GROUP", "marketingName": "GammaMax",
             "description": "Gamma ray tool", "genericType": "Gamma Ray", "loggingMethod": "Wireline",
             "typeDescription": "Scintillator"},
            {"code": "T1", "companyCode": 20, "group": "GR-GROUP", "marketingName": "GR-20",
             "description": "Another gamma ray tool", "genericType": "Gamma Ray", "loggingMethod": "LWD",
             "typeDescription": None},
            {"code": "T2", "companyCode": 20, "group": "DEN-GROUP", "marketingName": None,
             "description": "Density tool", "genericType": "Density", "loggingMethod": "Wireline",
             "typeDescription": None},
        ],
        "curves": [
            {"mnemonic": "GR", "shortMnemonic": "GR", "companyCode": 10, "property": "Gamma ray total",
             "quantity": "api gamma ray", "description": "Gamma ray"},
            {"mnemonic": "GR", "shortMnemonic": None, "companyCode": 20, "property": "Gamma ray total",
             "quantity": "api gamma ray", "description": None},
            {"mnemonic": "GR", "shortMnemonic": None, "companyCode": -1, "property": "Gamma ray total",
             "quantity": "api gamma ray", "description": "Generic gamma ray"},
            {"mnemonic": "RHOB", "shortMnemonic": "RHOB", "companyCode": 10, "property": "Bulk density",
             "quantity": "mass per volume", "description": "Bulk density"},
        ],
        "curve_links": [
            {"toolCode": "T1", "companyCode": 10, "curveMnemonic": "GR"},
            {"toolCode": "T1", "companyCode": 10, "curveMnemonic": "RHOB"},
            {"toolCode": "T1", "companyCode": 10, "curveMnemonic": "GR"},
            {"toolCode": "T1", "companyCode": 20, "curveMnemonic": "GR"},
            {"toolCode": "T9", "companyCode": 10, "curveMnemonic": "GR"},
            {"toolCode": "T2", "companyCode": 20, "curveMnemonic": "XXX"},
        ],
    }


def write_json_catalog(folder: Path, skip: tuple[str, ...] = (),
                       overrides: dict[str, str] | None = None) -> Path:
    """Write the fixture documents into ``folder``.

    ``skip`` leaves entity files out; ``overrides`` replaces a file's text.
    """
    folder = Path(folder)
    folder.mkdir(parents=True, exist_ok=True)
    overrides = overrides or {}
    for entity, items in make_documents().items():
        if entity in skip:
            continue
        path = folder / FILE_NAMES[entity]
        path.write_text(overrides.get(entity, json.dumps(items)), encoding="utf-8")
    return folder


def write_workbooks(folder: Path) -> tuple[Path, Path]:
    """Write the fixture as PWLS logs + properties workbooks."""
    folder = Path(folder)
    folder.mkdir(parents=True, exist_ok=True)
    docs = make_documents()

    logs = Workbook()
    logs.remove(logs.active)

    ws = logs.create_sheet("Company Codes")
    ws.append(["Code", "Name"])
    for c in docs["companies"]:
        ws.append([c["code"], c["name"]])
    ws.append(["abc", "Bad code"])          # skipped: non-integer code
    ws.append([30, None])                   # skipped: no name

    ws = logs.create_sheet("Logging Method")
    ws.append(["Name", "Description"])
    for m in docs["logging_methods"]:
        ws.append([m["name"], m["description"]])

    ws = logs.create_sheet("Well Log Tool Class")
    ws.append(["Name", "Description"])
    for t in docs["tool_classes"]:
        ws.append([t["name"], t["description"]])

    ws = logs.create_sheet("Tools")
    ws.append(["Company", "Code", "Group", "Marketing", "Description", "Generic", "Method", "Type"])
    for t in docs["tools"]:
        ws.append([t["companyCode"], t["code"], t["group"], t["marketingName"], t["description"],
                   t["genericType"], t["loggingMethod"], t["typeDescription"]])

    ws = logs.create_sheet("Curves")
    ws.append(["Company", "Mnemonic", "Property", "Quantity", "LIS", "Description"])
    for c in docs["curves"]:
        code = None if c["companyCode"] == -1 else c["companyCode"]
        ws.append([code, c["mnemonic"], c["property"], c["quantity"], c["shortMnemonic"],
                   c["description"]])

    ws = logs.create_sheet("Curves Within Tools")
    ws.append(["Company", "Tool", "Curve"])
    for link in docs["curve_links"]:
        ws.append([link["companyCode"], link["toolCode"], link["curveMnemonic"]])

    logs_path = folder / "PWLS_Logs.xlsx"
    logs.save(logs_path)

    props = Workbook()
    ws = props.active
    ws.title = "Properties"
    ws.append(["Sort", "Name", "Parent", "Description", "Abstract", "Quantity",
               "G", "H", "I", "GUID", "Parent GUID"])
    guid_of = {p["name"]: p["guid"] for p in docs["properties"]}
    for p in docs["properties"]:
        parent_guid = guid_of.get(p["parent"], "missing-guid" if p["parent"] else None)
        ws.append([p["sortOrder"], p["name"], p["parent"], p["description"],
                   "TRUE" if p["isAbstract"] else "FALSE", p["quantity"],
                   None, None, None, p["guid"], parent_guid])
    ws.append(["n/a", "Unsorted", None, "Bad sort order", "FALSE", "x", None, None, None, "g99", None])

    props_path = folder / "PWLS_Properties.xlsx"
    props.save(props_path)
    return logs_path, props_path
