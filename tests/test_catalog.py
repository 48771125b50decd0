"""Tests for doctracer.catalog."""

from __future__ import annotations

import dataclasses

import pytest

from doctracer.catalog import DuplicateSymbolError, SymbolCatalog, snapshot_of
from tests._fixtures.symbols import make_class


def test_ingest_orders_namespaces_and_classes_by_first_appearance() -> None:
    catalog = SymbolCatalog()
    catalog.ingest([make_class("N1\\A"), make_class("N2\\B"), make_class("N1\\A2")])

    snapshot = catalog.snapshot()

    assert list(snapshot) == ["N1", "N2"]
    assert list(snapshot["N1"]) == ["A", "A2"]
    assert list(snapshot["N2"]) == ["B"]


def test_reingest_replaces_record_and_keeps_position() -> None:
    catalog = SymbolCatalog()
    original = make_class("N1\\A", methods=["run"])
    catalog.ingest([original, make_class("N1\\B")])

    updated = make_class("N1\\A", constants=["LIMIT"], doc="/** Updated. */")
    catalog.ingest([updated])

    snapshot = catalog.snapshot()
    assert list(snapshot["N1"]) == ["A", "B"]
    assert snapshot["N1"]["A"] is updated
    assert list(snapshot["N1"]["A"].methods) == []
    assert list(snapshot["N1"]["A"].constants) == ["LIMIT"]


def test_ingest_accumulates_across_passes() -> None:
    catalog = SymbolCatalog()
    catalog.ingest([make_class("N1\\A")])
    catalog.ingest([make_class("N2\\B")])
    catalog.ingest([])

    assert catalog.namespaces == ["N1", "N2"]
    assert len(catalog) == 2


def test_conflicting_fully_qualified_names_raise_and_leave_catalog_intact() -> None:
    catalog = SymbolCatalog()
    first = make_class("N1\\A")
    catalog.ingest([first])

    impostor = dataclasses.replace(make_class("N1\\A"), fully_qualified_name="Other\\A")
    with pytest.raises(DuplicateSymbolError) as excinfo:
        catalog.ingest([make_class("N1\\Z"), impostor])

    assert excinfo.value.namespace == "N1"
    assert excinfo.value.short_name == "A"
    assert excinfo.value.existing == "N1\\A"
    assert excinfo.value.incoming == "Other\\A"
    assert list(catalog.snapshot()["N1"]) == ["A"]
    assert catalog.get("N1", "A") is first


def test_conflict_inside_one_batch_is_detected() -> None:
    catalog = SymbolCatalog()
    clash = dataclasses.replace(make_class("N1\\A"), fully_qualified_name="N9\\A")

    with pytest.raises(DuplicateSymbolError):
        catalog.ingest([make_class("N1\\A"), clash])

    assert not catalog


def test_snapshot_is_a_copy() -> None:
    catalog = SymbolCatalog()
    catalog.ingest([make_class("N1\\A")])

    snapshot = catalog.snapshot()
    snapshot["N1"].clear()
    snapshot["Extra"] = {}

    assert list(catalog.snapshot()) == ["N1"]
    assert list(catalog.snapshot()["N1"]) == ["A"]


def test_snapshot_of_accepts_catalog_or_mapping() -> None:
    catalog = SymbolCatalog()
    catalog.ingest([make_class("N1\\A")])

    assert snapshot_of(catalog) == catalog.snapshot()
    assert snapshot_of(catalog.snapshot()) == catalog.snapshot()
