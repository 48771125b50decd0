"""Recursive discovery of files handed to introspectors."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, Iterator

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


def iter_source_files(
    root: Path,
    supports: Callable[[Path], bool],
    exclude: Iterable[str] = (),
) -> Iterator[Path]:
    """Yield files below ``root`` accepted by ``supports``, in sorted order.

    Directories whose name appears in ``exclude`` are pruned with everything
    below them.
    """
    if not root.exists():
        raise FileNotFoundError(f"Path not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {root}")

    excluded = _EXCLUDED_DIRS | set(exclude)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in excluded)
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            if filename in _EXCLUDED_FILES:
                continue
            path = current_dir / filename
            if supports(path):
                yield path


__all__ = ["iter_source_files"]
