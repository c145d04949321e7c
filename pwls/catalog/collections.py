"""Entity collections: one keyed container per PWLS entity type.

Every collection stores ``natural key -> entity``.  Tools and curves are
keyed by a composite ``(primary field, company code)`` and a later
insert replaces an earlier one.  The other collections keep the first
entity for a key and reject duplicates.
"""

from __future__ import annotations

import logging
from typing import Generic, Hashable, Iterator, TypeVar

from .models import Company, Curve, LoggingMethod, Property, Tool, ToolClass


log = logging.getLogger("pwls.catalog.collections")

E = TypeVar("E")


class _KeyedCollection(Generic[E]):
    entity_name = "entity"
    replace_duplicates = False          # True: last write wins

    def __init__(self):
        self._items: dict[Hashable, E] = {}
        self._sealed = False

    def _key(self, entity: E) -> Hashable:
        raise NotImplementedError

    def add(self, entity: E) -> E:
        """Insert ``entity`` and return whatever is now stored under its key."""
        if entity is None:
            raise ValueError(f"{self.entity_name} cannot be None")
        if self._sealed:
            raise RuntimeError(f"{type(self).__name__} is read-only after loading")

        key = self._key(entity)
        existing = self._items.get(key)
        if existing is not None and existing is not entity:
            if not self.replace_duplicates:
                log.warning("Duplicate %s %r ignored, keeping the first one",
                            self.entity_name, key)
                return existing
            log.debug("Replacing %s %r", self.entity_name, key)
        self._items[key] = entity
        return entity

    def get_all(self) -> frozenset[E]:
        return frozenset(self._items.values())

    def seal(self) -> None:
        """Make the collection (and its mutable entities) read-only."""
        for entity in self._items.values():
            seal = getattr(entity, "seal", None)
            if seal is not None:
                seal()
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _get(self, key: Hashable) -> E | None:
        return self._items.get(key)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._items.values()))

    def __contains__(self, entity: object) -> bool:
        try:
            key = self._key(entity)     # type: ignore[arg-type]
        except AttributeError:
            return False
        return self._items.get(key) == entity

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} {self.entity_name}s)"


class Companies(_KeyedCollection[Company]):
    entity_name = "company"

    def _key(self, company: Company) -> int:
        return company.code

    def find(self, code: int) -> Company | None:
        return self._get(code)


class LoggingMethods(_KeyedCollection[LoggingMethod]):
    entity_name = "logging method"

    def _key(self, method: LoggingMethod) -> str:
        return method.name

    def find(self, name: str) -> LoggingMethod | None:
        return self._get(name)


class ToolClasses(_KeyedCollection[ToolClass]):
    entity_name = "tool class"

    def _key(self, tool_class: ToolClass) -> str:
        return tool_class.name

    def find(self, name: str) -> ToolClass | None:
        return self._get(name)


class Properties(_KeyedCollection[Property]):
    entity_name = "property"

    def _key(self, prop: Property) -> str:
        return prop.guid

    def find_by_guid(self, guid: str) -> Property | None:
        return self._get(guid)

    def find_by_name(self, name: str) -> Property | None:
        # Names are not the identity key; first match wins
        for prop in self._items.values():
            if prop.name == name:
                return prop
        return None


class Tools(_KeyedCollection[Tool]):
    entity_name = "tool"
    replace_duplicates = True

    def _key(self, tool: Tool) -> tuple[str, int | None]:
        return tool.key

    def find(self, code: str, company_code: int | None) -> Tool | None:
        return self._get((code, company_code))


class Curves(_KeyedCollection[Curve]):
    entity_name = "curve"
    replace_duplicates = True

    def _key(self, curve: Curve) -> tuple[str, int | None]:
        return curve.key

    def find(self, mnemonic: str, company_code: int | None) -> Curve | None:
        return self._get((mnemonic, company_code))
