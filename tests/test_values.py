"""Tests for doctracer.values."""

from __future__ import annotations

import pytest

from doctracer.values import NO_DEFAULT, format_type, print_value


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (NO_DEFAULT, ""),
        (None, "null"),
        (True, "true"),
        (False, "false"),
        ("acme", "'acme'"),
        ("", "''"),
        (0, "0"),
        (0.9, "0.9"),
        (["foo", "bar"], '["foo", "bar"]'),
        ([101, {"number": "101"}], '[101, {"number":"101"}]'),
    ],
)
def test_print_value(value, expected: str) -> None:
    assert print_value(value) == expected


def test_no_default_and_null_never_collapse() -> None:
    assert print_value(NO_DEFAULT) != print_value(None)


@pytest.mark.parametrize(
    ("members", "nullable", "expected"),
    [
        (None, False, ""),
        ("int", False, "int"),
        ("int", True, "?int"),
        ("?string", False, "?string"),
        ("string|null", False, "?string"),
        (["int", "string"], True, "?int|string"),
        (["null"], False, "null"),
        ("int|int", False, "int"),
    ],
)
def test_format_type_puts_nullable_prefix_before_union(members, nullable: bool, expected: str) -> None:
    assert format_type(members, nullable) == expected
