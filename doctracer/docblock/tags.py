"""Tag variants produced by the docblock parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class TagClass(str, Enum):
    """Parsing behaviour applied to a tag name."""

    PARAM = "param"
    TYPED = "typed"
    GENERIC = "generic"


_PARAM_TAGS = frozenset({"param"})
_TYPED_TAGS = frozenset({"var", "return", "throws"})


def tag_class(name: str) -> TagClass:
    """Return the parsing behaviour for a tag name (without the ``@``)."""
    key = name.lower()
    if key in _PARAM_TAGS:
        return TagClass.PARAM
    if key in _TYPED_TAGS:
        return TagClass.TYPED
    return TagClass.GENERIC


@dataclass(frozen=True)
class ParamTag:
    """``@param type $variable description``."""

    name: str
    type: str
    variable: str
    description: str
    rendered: str
    variadic: bool = False
    by_reference: bool = False

    @property
    def types(self) -> list[str]:
        return _split_union(self.type)

    @property
    def signature(self) -> str:
        """Variable as written in source, e.g. ``...$args``."""
        if not self.variable:
            return ""
        prefix = ("&" if self.by_reference else "") + ("..." if self.variadic else "")
        return f"{prefix}${self.variable}"


@dataclass(frozen=True)
class TypedTag:
    """``@var``, ``@return`` and ``@throws``: ``type description``."""

    name: str
    type: str
    description: str
    rendered: str

    @property
    def types(self) -> list[str]:
        return _split_union(self.type)


@dataclass(frozen=True)
class GenericTag:
    """Any other tag, or a tag whose body could not be interpreted."""

    name: str
    rendered: str


DocTag = Union[ParamTag, TypedTag, GenericTag]


def _split_union(type_expression: str) -> list[str]:
    if not type_expression:
        return []
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in type_expression:
        if char in "<({[":
            depth += 1
        elif char in ">)}]":
            depth = max(depth - 1, 0)
        if char == "|" and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [part for part in parts if part]


__all__ = [
    "DocTag",
    "GenericTag",
    "ParamTag",
    "TagClass",
    "TypedTag",
    "tag_class",
]
