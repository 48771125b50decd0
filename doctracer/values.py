"""Printable default values and canonical type annotations."""

from __future__ import annotations

import json
from typing import Any, Iterable


class _NoDefault:
    """Marker for members that declare no default value."""

    _instance: "_NoDefault | None" = None

    def __new__(cls) -> "_NoDefault":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT = _NoDefault()


def print_value(value: Any) -> str:
    """Return the printed token for an introspected value.

    ``NO_DEFAULT`` prints as an empty string while ``None`` prints as
    ``"null"``, so an absent default and an explicit null default stay
    distinguishable downstream.
    """
    if value is NO_DEFAULT:
        return ""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(", ", ":"))
    return str(value)


def format_type(members: str | Iterable[str] | None, nullable: bool = False) -> str:
    """Return a canonical type annotation: ``?`` prefix, then ``|``-joined members.

    A literal ``null`` member is folded into the ``?`` prefix, so
    ``"string|null"`` and ``("string", nullable=True)`` both give ``"?string"``.
    """
    if members is None:
        parts: list[str] = []
    elif isinstance(members, str):
        parts = members.split("|")
    else:
        parts = [str(member) for member in members]

    cleaned: list[str] = []
    for part in parts:
        part = part.strip()
        if part.startswith("?"):
            nullable = True
            part = part[1:].strip()
        if not part:
            continue
        if part.lower() == "null":
            nullable = True
            continue
        if part not in cleaned:
            cleaned.append(part)

    if not cleaned:
        return "null" if nullable else ""
    joined = "|".join(cleaned)
    return f"?{joined}" if nullable else joined


__all__ = ["NO_DEFAULT", "format_type", "print_value"]
