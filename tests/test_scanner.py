"""Tests for doctracer.scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from doctracer.scanner import iter_source_files


def _write(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _is_manifest(path: Path) -> bool:
    return path.name.endswith(".symbols.yml")


def test_walks_recursively_in_sorted_order(tmp_path: Path) -> None:
    root = tmp_path / "lib"
    _write(root / "b.symbols.yml")
    _write(root / "a.symbols.yml")
    _write(root / "nested" / "deep" / "c.symbols.yml")
    _write(root / "README.md")

    found = [path.relative_to(root).as_posix() for path in iter_source_files(root, _is_manifest)]

    assert found == ["a.symbols.yml", "b.symbols.yml", "nested/deep/c.symbols.yml"]


def test_prunes_excluded_and_tooling_directories(tmp_path: Path) -> None:
    root = tmp_path / "lib"
    _write(root / "src" / "keep.symbols.yml")
    _write(root / "vendor" / "drop.symbols.yml")
    _write(root / ".git" / "hidden.symbols.yml")
    _write(root / "node_modules" / "pkg" / "dep.symbols.yml")

    found = [path.name for path in iter_source_files(root, _is_manifest, exclude=["vendor"])]

    assert found == ["keep.symbols.yml"]


def test_missing_root_raises(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(FileNotFoundError) as excinfo:
        list(iter_source_files(missing, _is_manifest))

    assert str(missing) in str(excinfo.value)


def test_file_root_raises(tmp_path: Path) -> None:
    target = tmp_path / "single.symbols.yml"
    _write(target)

    with pytest.raises(NotADirectoryError):
        list(iter_source_files(target, _is_manifest))
