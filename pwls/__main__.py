"""
PWLS catalog: entry point.

Usage:
    python -m pwls serve                         # web server on :8081
    python -m pwls serve --source ./json --port 3000
    python -m pwls status --source ./json
    python -m pwls query curves --filter mnemonic=GR --filter company_code=440
    python -m pwls convert --source PWLS_v3.0_Logs.xlsx \\
        --properties-workbook PWLS_v3.0_Properties.xlsx --out ./json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pwls.config import Settings, load_env


QUERIES = {
    "properties": ("get_properties", {"name", "quantity"}),
    "companies": ("get_companies", {"code"}),
    "loggingMethods": ("get_logging_methods", {"name"}),
    "toolClasses": ("get_tool_classes", {"name"}),
    "tools": ("get_tools", {"code", "company_code", "group", "generic_type", "logging_method"}),
    "curves": ("get_curves", {"mnemonic", "company_code", "property", "quantity"}),
}

INT_FILTERS = {"code", "company_code"}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pwls", description="Practical Well Log Standard catalog")
    p.add_argument("--log-level", default=None, help="Logging level (default from PWLS_LOG_LEVEL)")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_source(sp):
        sp.add_argument("--source", default=None,
                        help="Base URL, JSON folder or logs workbook (.xlsx)")
        sp.add_argument("--properties-workbook", default=None,
                        help="Properties workbook, used with an .xlsx source")

    sv = sub.add_parser("serve", help="Start the web server")
    add_source(sv)
    sv.add_argument("--host", default=None, help="Host to bind")
    sv.add_argument("--port", type=int, default=None, help="Port to bind")

    st = sub.add_parser("status", help="Load the catalog and print the load report")
    add_source(st)

    q = sub.add_parser("query", help="Print matching entities as JSON")
    add_source(q)
    q.add_argument("entity", choices=sorted(QUERIES))
    q.add_argument("--filter", action="append", default=[], metavar="FIELD=VALUE",
                   help="Exact-match filter, repeatable")

    cv = sub.add_parser("convert", help="Write the catalog as PWLS JSON documents")
    add_source(cv)
    cv.add_argument("--out", required=True, help="Output directory")

    return p


def parse_filters(entity: str, items: list[str]) -> dict:
    """Turn FIELD=VALUE strings into keyword arguments for a catalog query."""
    allowed = QUERIES[entity][1]
    filters: dict = {}
    for item in items:
        if "=" not in item:
            raise ValueError(f"Filter '{item}' is not FIELD=VALUE")
        field, value = item.split("=", 1)
        field = field.strip()
        if field not in allowed:
            raise ValueError(f"Unknown filter '{field}' for {entity}, expected one of {sorted(allowed)}")
        filters[field] = int(value) if field in INT_FILTERS else value
    return filters


def main(argv: list[str] | None = None) -> int:
    load_env()
    settings = Settings.from_env()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "serve":
        from pwls.web.server import main as serve
        serve(host=args.host, port=args.port, source=args.source)
        return 0

    from pwls.catalog import Catalog, catalog_to_dict, dump_catalog, entities_to_list

    try:
        filters = parse_filters(args.entity, args.filter) if args.cmd == "query" else {}
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    catalog = Catalog.load(args.source or settings.source,
                           args.properties_workbook or settings.properties_workbook,
                           settings.http_timeout_s)

    if args.cmd == "status":
        print(json.dumps(catalog_to_dict(catalog), indent=2))
        return 0 if catalog.report.ok else 1

    if args.cmd == "query":
        method = getattr(catalog, QUERIES[args.entity][0])
        print(json.dumps(entities_to_list(method(**filters)), indent=2, ensure_ascii=False))
        return 0

    if args.cmd == "convert":
        for path in dump_catalog(catalog, args.out):
            print(f"Wrote {path}")
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
