"""Ordered, read-only collection of dependency records grouped by manager."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .models import DependencyRecord


class DependencyCatalog:
    """Records grouped by package manager.

    Manager groups keep first-seen order and records keep insertion order.
    A record whose (manager, package) key is already present replaces the
    earlier one at its original position. The catalog offers no mutators;
    build a new one instead.
    """

    def __init__(
        self,
        records: Iterable[DependencyRecord] = (),
        managers: Iterable[str] = (),
    ):
        """Build the catalog.

        Args:
            records: Records in document/listing order.
            managers: Manager names to register up front, so sections
                without packages still show up as empty groups.
        """
        self._groups: Dict[str, Dict[str, DependencyRecord]] = {}
        for manager in managers:
            self._groups.setdefault(manager, {})
        for record in records:
            if not isinstance(record, DependencyRecord):
                raise TypeError(f"expected DependencyRecord, got {type(record).__name__}")
            self._groups.setdefault(record.package_manager, {})[record.package_name] = record

    def managers(self) -> List[str]:
        return list(self._groups)

    def group(self, manager: str) -> Tuple[DependencyRecord, ...]:
        """Records of one manager, empty when the manager is unknown."""
        return tuple(self._groups.get(manager, {}).values())

    def get(self, manager: str, package: str) -> Optional[DependencyRecord]:
        return self._groups.get(manager, {}).get(package)

    def all_flat(self) -> List[DependencyRecord]:
        """All records across managers in catalog order."""
        return [record for group in self._groups.values() for record in group.values()]

    def __iter__(self) -> Iterator[DependencyRecord]:
        return iter(self.all_flat())

    def __len__(self) -> int:
        return sum(len(group) for group in self._groups.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        manager, package = key
        return package in self._groups.get(manager, {})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyCatalog):
            return NotImplemented
        return self._as_comparable() == other._as_comparable()

    def __hash__(self):
        return hash(tuple(self._as_comparable()))

    def _as_comparable(self) -> List[Tuple[str, Tuple[DependencyRecord, ...]]]:
        return [(manager, self.group(manager)) for manager in self._groups]

    def __repr__(self) -> str:
        counts = ", ".join(f"{m}={len(g)}" for m, g in self._groups.items())
        return f"DependencyCatalog({counts})"
