"""Symbol introspectors: discovery and per-file selection.

Selection order is fixed: the built-in manifest introspector comes first and
so always owns ``*.symbols.json``/``*.symbols.yml``/``*.symbols.yaml``;
plugins registered under the ``doctracer.introspectors`` entry-point group
follow, sorted by entry-point name. A file goes to the first introspector
whose ``supports`` accepts it.
"""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Type

from ..logging import get_logger
from .base import Introspector
from .manifest import MANIFEST_SUFFIXES, ManifestError, ManifestIntrospector

ENTRY_POINT_GROUP = "doctracer.introspectors"

BUILTIN_INTROSPECTORS: Dict[str, Type[Introspector]] = {
    "manifest": ManifestIntrospector,
}

_logger = get_logger("introspect")


def discover_introspectors(enabled: Sequence[str] | None = None) -> List[Introspector]:
    """Return introspectors in selection order, optionally restricted to ``enabled`` names.

    Plugin names share one namespace with the built-ins; a plugin reusing a
    taken name raises ``ValueError``, as does an unknown enabled name.
    """
    wanted = None if enabled is None else {name.lower() for name in enabled}
    known = set(BUILTIN_INTROSPECTORS)
    selected: List[Introspector] = [
        factory()
        for name, factory in BUILTIN_INTROSPECTORS.items()
        if wanted is None or name in wanted
    ]

    for entry in sorted(_iter_entry_points(), key=lambda item: item.name.lower()):
        name = entry.name.lower()
        if name in known:
            raise ValueError(f"Introspector plugin '{entry.name}' reuses a registered name")
        known.add(name)
        if wanted is not None and name not in wanted:
            continue
        plugin = _load_plugin(entry)
        if any(plugin.supports(Path(f"sample{suffix}")) for suffix in MANIFEST_SUFFIXES):
            _logger.debug(
                "Plugin '%s' also accepts symbol manifests; the built-in reader keeps them",
                entry.name,
            )
        selected.append(plugin)

    if wanted is not None and wanted - known:
        missing = ", ".join(sorted(wanted - known))
        raise ValueError(f"Unknown introspectors requested: {missing}")
    return selected


def select_introspector(introspectors: Iterable[Introspector], path: Path) -> Optional[Introspector]:
    """Return the first introspector that accepts ``path``, or ``None``."""
    for introspector in introspectors:
        if introspector.supports(path):
            return introspector
    return None


def _load_plugin(entry: metadata.EntryPoint) -> Introspector:
    try:
        loaded = entry.load()
    except Exception as exc:  # pragma: no cover - plugin import failure
        raise RuntimeError(f"Failed to load introspector plugin '{entry.name}': {exc}") from exc
    if isinstance(loaded, type) and issubclass(loaded, Introspector):
        return loaded()
    if isinstance(loaded, Introspector):
        return loaded
    raise TypeError(
        f"Introspector plugin '{entry.name}' must name an Introspector subclass or instance"
    )


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=ENTRY_POINT_GROUP)


__all__ = [
    "BUILTIN_INTROSPECTORS",
    "ENTRY_POINT_GROUP",
    "Introspector",
    "MANIFEST_SUFFIXES",
    "ManifestError",
    "ManifestIntrospector",
    "discover_introspectors",
    "select_introspector",
]
