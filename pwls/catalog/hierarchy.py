"""Property hierarchy: deferred parent resolution and cycle checks.

Parents are declared by an identifier whose kind depends on the source
(the JSON documents name the parent, the spreadsheet gives its GUID).
Resolution happens in two phases: the loader records a ``ParentRef``
per property while constructing them, then ``resolve_parents`` links
them once every property of the source exists.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .collections import Properties
from .models import CatalogWarning, Property


log = logging.getLogger("pwls.catalog.hierarchy")

SOURCE = "properties"


class ParentScheme(enum.Enum):
    NAME = "name"
    GUID = "guid"


@dataclass(frozen=True)
class ParentRef:
    identifier: str | None
    scheme: ParentScheme

    @property
    def is_empty(self) -> bool:
        if self.identifier is None:
            return True
        return isinstance(self.identifier, str) and not self.identifier.strip()

    @property
    def is_valid(self) -> bool:
        return self.identifier is None or isinstance(self.identifier, str)

    def lookup(self, properties: Properties) -> Property | None:
        """Find the referenced property; None for empty or non-str identifiers."""
        if self.is_empty or not self.is_valid:
            return None
        if self.scheme is ParentScheme.GUID:
            return properties.find_by_guid(self.identifier)
        return properties.find_by_name(self.identifier)


def resolve_parents(properties: Properties,
                    pending: dict[Property, ParentRef]) -> list[CatalogWarning]:
    """Attach each property to its declared parent.

    Properties without an identifier stay at root level.  A property that
    resolves to itself also stays at root level.  Unknown identifiers
    and identifiers that are not text are reported and leave the
    property parent-less (an orphan).
    """
    warnings: list[CatalogWarning] = []

    for prop in properties:
        ref = pending.get(prop)
        if ref is None or ref.is_empty:
            continue

        parent = ref.lookup(properties)
        if parent is None:
            kind = "Missing" if ref.is_valid else "Invalid"
            msg = f"{kind} parent property ({ref.scheme.value}={ref.identifier!r})"
            log.warning("%s for %s", msg, prop.name)
            warnings.append(CatalogWarning(SOURCE, prop.name, msg))
            continue

        # Keep parent == None if at root level
        if parent is prop:
            log.debug("Property %s names itself as parent, kept at root", prop.name)
            continue

        prop.set_parent(parent)

    return warnings


def find_cycles(properties: Properties, max_depth: int | None = None) -> list[CatalogWarning]:
    """Report every property that sits on a parent cycle (A -> B -> A)."""
    warnings: list[CatalogWarning] = []
    on_cycle: set[Property] = set()

    for start in properties:
        if start in on_cycle:
            continue
        path: list[Property] = []
        index: dict[Property, int] = {}
        node: Property | None = start
        while node is not None and node not in index:
            if max_depth is not None and len(path) > max_depth:
                break
            index[node] = len(path)
            path.append(node)
            node = node.parent
        if node is None or node not in index:
            continue

        cycle = path[index[node]:]
        if any(p in on_cycle for p in cycle):
            continue
        on_cycle.update(cycle)
        msg = "Parent cycle: " + " -> ".join(p.name for p in cycle + [cycle[0]])
        log.warning("%s", msg)
        for p in cycle:
            warnings.append(CatalogWarning(SOURCE, p.name, msg))

    return warnings
