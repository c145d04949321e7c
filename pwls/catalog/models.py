"""Catalog dataclasses: typed representations of the PWLS entities."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pwls.config import SETTINGS


log = logging.getLogger("pwls.catalog.models")


def _require(entity: object, *names: str) -> None:
    """Raise ValueError for the first required field that is None."""
    for name in names:
        if getattr(entity, name) is None:
            raise ValueError(f"{type(entity).__name__}.{name} cannot be None")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_text(entity: object, *names: str) -> None:
    """Raise ValueError for the first of the fields that is set but not a str."""
    for name in names:
        value = getattr(entity, name)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{type(entity).__name__}.{name} must be a str, got {value!r}")


# ── Entities ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Company:
    code: int
    name: str

    def __post_init__(self):
        _require(self, "code", "name")
        _require_text(self, "name")
        if not _is_int(self.code):
            raise ValueError(f"Company.code must be an int, got {self.code!r}")

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


@dataclass(frozen=True)
class LoggingMethod:
    name: str
    description: str

    def __post_init__(self):
        _require(self, "name", "description")
        _require_text(self, "name", "description")


@dataclass(frozen=True)
class ToolClass:
    name: str
    description: str

    def __post_init__(self):
        _require(self, "name", "description")
        _require_text(self, "name", "description")


@dataclass(frozen=True)
class Curve:
    mnemonic: str
    property: str                       # Property name, not validated
    quantity: str
    short_mnemonic: str | None = None   # LIS mnemonic
    company_code: int | None = None
    description: str | None = None

    def __post_init__(self):
        _require(self, "mnemonic", "property", "quantity")
        _require_text(self, "mnemonic", "property", "quantity", "short_mnemonic", "description")
        if self.company_code is not None and not _is_int(self.company_code):
            raise ValueError(f"Curve.company_code must be an int, got {self.company_code!r}")

    @property
    def key(self) -> tuple[str, int | None]:
        return (self.mnemonic, self.company_code)


@dataclass(eq=False)
class Property:
    """What is being measured by a curve.

    Properties form a tree through ``parent``.  The parent is attached
    after all properties of a source are constructed (see
    ``pwls.catalog.hierarchy``), so it is not a constructor argument.
    Equality and hashing are by identity.
    """
    name: str
    description: str
    quantity: str
    guid: str
    sort_order: int | None = None
    is_abstract: bool = False
    parent: Property | None = field(default=None, init=False, repr=False)
    _sealed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        _require(self, "name", "description", "quantity", "guid")
        _require_text(self, "name", "description", "quantity", "guid")
        if self.sort_order is not None and not _is_int(self.sort_order):
            raise ValueError(f"Property.sort_order must be an int, got {self.sort_order!r}")
        if not isinstance(self.is_abstract, bool):
            raise ValueError(f"Property.is_abstract must be a bool, got {self.is_abstract!r}")

    def seal(self) -> None:
        self._sealed = True

    def set_parent(self, parent: Property) -> None:
        if parent is None:
            raise ValueError("parent cannot be None")
        if self._sealed:
            raise RuntimeError(f"Property '{self.name}' is read-only after loading")
        if parent is self:
            raise ValueError(f"Property '{self.name}' cannot be its own parent")
        self.parent = parent

    def ancestors(self, max_depth: int | None = None) -> list[Property]:
        """Return the chain of parents, nearest first.

        The walk stops at the root, at the first repeated property
        (a cycle) or after ``max_depth`` steps, whichever comes first.
        Cycles and truncation are logged as warnings.
        """
        limit = SETTINGS.max_ancestry_depth if max_depth is None else max_depth
        chain: list[Property] = []
        seen: set[Property] = {self}
        node = self.parent
        while node is not None:
            if node in seen:
                log.warning("Cycle in property hierarchy: %s -> ... -> %s",
                            self.name, node.name)
                break
            if len(chain) >= limit:
                log.warning("Ancestry of %s truncated at depth %d", self.name, limit)
                break
            chain.append(node)
            seen.add(node)
            node = node.parent
        return chain

    @property
    def lineage(self) -> str:
        """Ancestry rendered as 'Parent - Grandparent - ...'."""
        return " - ".join(p.name for p in self.ancestors())


@dataclass(eq=False)
class Tool:
    code: str
    company_code: int | None = None
    group: str | None = None
    marketing_name: str | None = None
    description: str | None = None
    generic_type: str | None = None
    logging_method: str | None = None   # LoggingMethod name
    type_description: str | None = None
    _curves: set[Curve] = field(default_factory=set, init=False, repr=False)
    _sealed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        _require(self, "code")
        _require_text(self, "code", "group", "marketing_name", "description",
                      "generic_type", "logging_method", "type_description")
        if self.company_code is not None and not _is_int(self.company_code):
            raise ValueError(f"Tool.company_code must be an int, got {self.company_code!r}")

    @property
    def key(self) -> tuple[str, int | None]:
        return (self.code, self.company_code)

    @property
    def curves(self) -> frozenset[Curve]:
        return frozenset(self._curves)

    def seal(self) -> None:
        self._sealed = True

    def add_curve(self, curve: Curve) -> bool:
        """Attach a curve; returns False when it was already attached."""
        if curve is None:
            raise ValueError("curve cannot be None")
        if self._sealed:
            raise RuntimeError(f"Tool '{self.code}' is read-only after loading")
        if curve in self._curves:
            return False
        self._curves.add(curve)
        return True


# ── Load bookkeeping ───────────────────────────────────────────────

@dataclass
class CatalogWarning:
    source: str                         # "companies", "curvesByTool", ...
    key: str
    message: str

    def __str__(self) -> str:
        return f"[{self.source}] {self.key}: {self.message}"


@dataclass
class LoadReport:
    """Result of loading the catalog: collection sizes and any warnings."""
    location: str
    counts: dict[str, int] = field(default_factory=dict)
    warnings: list[CatalogWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.warnings) == 0
