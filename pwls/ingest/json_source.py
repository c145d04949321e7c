"""JSON source: the PWLS documents in a local folder or under a base URL.

Each entity type lives in its own document (``companies.json``,
``tools.json``, ...), a JSON array of objects with camelCase field names.
Parents of properties are given by name.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import requests

from pwls.catalog.crossref import CurveLink
from pwls.catalog.hierarchy import ParentScheme
from pwls.config import SETTINGS

from .base import FILE_NAMES, SourceError


log = logging.getLogger("pwls.ingest.json")


def is_url(location: str | Path) -> bool:
    return isinstance(location, str) and location.lower().startswith(("http://", "https://"))


def _company_code(value):
    # Older documents use -1 for "no company"
    if value is None or value == -1:
        return None
    return value


def _flag(value, field: str) -> bool:
    # Anything but JSON true reads as false
    if value is not None and not isinstance(value, bool):
        log.warning("Expected a boolean for %s, got %r. Using false.", field, value)
    return value is True


class JsonSource:
    parent_scheme = ParentScheme.NAME

    def __init__(self, location: str | Path, timeout: float | None = None):
        if location is None:
            raise ValueError("location cannot be None")
        self.remote = is_url(location)
        self.location = str(location).rstrip("/") if self.remote else Path(location)
        self.timeout = SETTINGS.http_timeout_s if timeout is None else timeout

    def describe(self) -> str:
        return str(self.location)

    def locate(self, entity: str) -> str:
        name = FILE_NAMES[entity]
        if self.remote:
            return f"{self.location}/{name}"
        return str(self.location / name)

    # ── Document access ────────────────────────────────────────────

    def _fetch(self, target: str):
        try:
            response = requests.get(target, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            raise SourceError(f"Unable to fetch {target}: {exc}") from exc
        except ValueError as exc:
            raise SourceError(f"Invalid JSON in {target}: {exc}") from exc

    def _open(self, target: str):
        try:
            return json.loads(Path(target).read_text(encoding="utf-8"))
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError
            raise SourceError(f"Invalid JSON in {target}: {exc}") from exc
        except OSError as exc:
            raise SourceError(f"Unable to read {target}: {exc}") from exc

    def read_document(self, entity: str) -> list[dict]:
        """Return the array of objects for one entity type."""
        target = self.locate(entity)
        log.info("Read %s from %s", entity, target)
        data = self._fetch(target) if self.remote else self._open(target)

        if not isinstance(data, list):
            raise SourceError(f"Expected a JSON array in {target}, got {type(data).__name__}")
        for i, obj in enumerate(data):
            if not isinstance(obj, dict):
                raise SourceError(f"Entry {i} of {target} is not a JSON object")
        return data

    # ── Records ────────────────────────────────────────────────────

    def properties(self) -> list[dict]:
        return [
            {
                "name": o.get("name"),
                "description": o.get("description"),
                "quantity": o.get("quantity"),
                "guid": o.get("guid"),
                "sort_order": o.get("sortOrder"),
                "is_abstract": _flag(o.get("isAbstract"), "isAbstract"),
                "parent": o.get("parent"),
            }
            for o in self.read_document("properties")
        ]

    def companies(self) -> list[dict]:
        return [
            {"code": o.get("code"), "name": o.get("name")}
            for o in self.read_document("companies")
        ]

    def logging_methods(self) -> list[dict]:
        return [
            {"name": o.get("name"), "description": o.get("description")}
            for o in self.read_document("logging_methods")
        ]

    def tool_classes(self) -> list[dict]:
        return [
            {"name": o.get("name"), "description": o.get("description")}
            for o in self.read_document("tool_classes")
        ]

    def tools(self) -> list[dict]:
        return [
            {
                "code": o.get("code", o.get("toolCode")),
                "company_code": _company_code(o.get("companyCode")),
                "group": o.get("group"),
                "marketing_name": o.get("marketingName"),
                "description": o.get("description"),
                "generic_type": o.get("genericType"),
                "logging_method": o.get("loggingMethod"),
                "type_description": o.get("typeDescription"),
            }
            for o in self.read_document("tools")
        ]

    def curves(self) -> list[dict]:
        return [
            {
                "mnemonic": o.get("mnemonic"),
                "short_mnemonic": o.get("shortMnemonic"),
                "company_code": _company_code(o.get("companyCode")),
                "property": o.get("property"),
                "quantity": o.get("quantity"),
                "description": o.get("description"),
            }
            for o in self.read_document("curves")
        ]

    def curve_links(self) -> list[CurveLink]:
        return [
            CurveLink.same_company(
                o.get("toolCode"),
                o.get("curveMnemonic"),
                _company_code(o.get("companyCode")),
            )
            for o in self.read_document("curve_links")
        ]
