"""Accumulator of inspected symbols grouped by namespace."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Tuple

from .logging import get_logger
from .models import ClassRecord

Snapshot = Dict[str, Dict[str, ClassRecord]]


class DuplicateSymbolError(RuntimeError):
    """Raised when two different symbols claim the same namespace and short name."""

    def __init__(self, namespace: str, short_name: str, existing: str, incoming: str) -> None:
        super().__init__(
            f"Symbol {short_name!r} in namespace {namespace or '(global)'!r} resolves to both "
            f"{existing!r} and {incoming!r}"
        )
        self.namespace = namespace
        self.short_name = short_name
        self.existing = existing
        self.incoming = incoming


class SymbolCatalog:
    """Namespace -> class map built from one or more ingestion passes.

    Re-ingesting a class replaces its record but keeps the position it got on
    first appearance. Callers must serialize ``ingest`` calls; the catalog
    holds no lock.
    """

    def __init__(self) -> None:
        self._namespaces: Dict[str, Dict[str, ClassRecord]] = {}
        self.logger = get_logger("catalog")

    def ingest(self, records: Iterable[ClassRecord]) -> None:
        """Merge a batch of records; the batch is applied entirely or not at all."""
        batch = list(records)
        self._check_conflicts(batch)

        for record in batch:
            classes = self._namespaces.setdefault(record.namespace, {})
            if record.short_name in classes:
                self.logger.debug("Replacing %s", record.fully_qualified_name)
            classes[record.short_name] = record

        self.logger.debug("Ingested %d symbols", len(batch))

    def snapshot(self) -> Snapshot:
        """Return an ordered copy of the namespace -> class mapping."""
        return {namespace: dict(classes) for namespace, classes in self._namespaces.items()}

    def get(self, namespace: str, short_name: str) -> ClassRecord | None:
        return self._namespaces.get(namespace, {}).get(short_name)

    def __len__(self) -> int:
        return sum(len(classes) for classes in self._namespaces.values())

    def __bool__(self) -> bool:
        return bool(self._namespaces)

    @property
    def namespaces(self) -> List[str]:
        return list(self._namespaces)

    def _check_conflicts(self, batch: List[ClassRecord]) -> None:
        pending: Dict[Tuple[str, str], str] = {}
        for record in batch:
            key = (record.namespace, record.short_name)
            existing = pending.get(key)
            if existing is None:
                current = self.get(*key)
                existing = current.fully_qualified_name if current else None
            if existing is not None and existing != record.fully_qualified_name:
                raise DuplicateSymbolError(
                    record.namespace, record.short_name, existing, record.fully_qualified_name
                )
            pending[key] = record.fully_qualified_name


def snapshot_of(source: "SymbolCatalog | Mapping[str, Mapping[str, ClassRecord]]") -> Snapshot:
    """Accept either a catalog or an already taken snapshot."""
    if isinstance(source, SymbolCatalog):
        return source.snapshot()
    return {namespace: dict(classes) for namespace, classes in source.items()}


__all__ = ["DuplicateSymbolError", "Snapshot", "SymbolCatalog", "snapshot_of"]
