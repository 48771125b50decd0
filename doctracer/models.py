"""Core data models shared across doctracer components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

from .docblock.tags import DocTag


class SymbolKind(str, Enum):
    """Declaration kind of an inspected symbol."""

    CLASS = "class"
    TRAIT = "trait"
    INTERFACE = "interface"


class MemberKind(str, Enum):
    """Kind of member declared directly on a symbol."""

    CONSTANT = "constant"
    PROPERTY = "property"
    METHOD = "method"


@dataclass(frozen=True)
class DocBlock:
    """Parsed structured comment: summary, description and grouped tags.

    A symbol without a comment carries an empty block rather than ``None``.
    """

    summary: str = ""
    description: str = ""
    tags: Mapping[str, Tuple[DocTag, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "tags", MappingProxyType({kind: tuple(group) for kind, group in self.tags.items()})
        )

    def __hash__(self) -> int:
        return hash((self.summary, self.description, tuple(self.tags.items())))

    @property
    def is_empty(self) -> bool:
        return not self.summary and not self.tags

    def iter_tags(self):
        """Yield every tag, kind groups in first-seen order."""
        for group in self.tags.values():
            yield from group


EMPTY_DOCBLOCK = DocBlock()


@dataclass(frozen=True)
class ParamRecord:
    """Method parameter as reported by the introspector."""

    name: str
    type_annotation: str = ""
    default_printed: str = ""


@dataclass(frozen=True)
class MemberRecord:
    """Constant, property or method declared directly on a symbol.

    ``default_value_printed`` is ``""`` when no default exists and ``"null"``
    for an explicit null default. For methods ``type_annotation`` holds the
    return type.
    """

    name: str
    kind: MemberKind
    modifiers: Tuple[str, ...] = ()
    type_annotation: str = ""
    default_value_printed: str = ""
    docblock: DocBlock = EMPTY_DOCBLOCK
    params: Tuple[ParamRecord, ...] = ()


@dataclass(frozen=True)
class ClassRecord:
    """Symbol metadata with its directly declared members in declaration order."""

    short_name: str
    fully_qualified_name: str
    namespace: str = ""
    source_file: str = ""
    kind: SymbolKind = SymbolKind.CLASS
    modifiers: Tuple[str, ...] = ()
    parent_fully_qualified_name: str = ""
    implemented_interfaces: Tuple[str, ...] = ()
    docblock: DocBlock = EMPTY_DOCBLOCK
    constants: Mapping[str, MemberRecord] = field(default_factory=dict)
    properties: Mapping[str, MemberRecord] = field(default_factory=dict)
    methods: Mapping[str, MemberRecord] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for section in ("constants", "properties", "methods"):
            object.__setattr__(self, section, _read_only(getattr(self, section)))

    def __hash__(self) -> int:
        return hash((self.fully_qualified_name, self.namespace, self.short_name, self.source_file))

    @property
    def has_members(self) -> bool:
        return bool(self.constants or self.properties or self.methods)

    def iter_members(self):
        """Yield constants, then properties, then methods."""
        yield from self.constants.values()
        yield from self.properties.values()
        yield from self.methods.values()


def _read_only(members: Mapping[str, MemberRecord]) -> Mapping[str, MemberRecord]:
    return MappingProxyType(dict(members))


__all__ = [
    "ClassRecord",
    "DocBlock",
    "EMPTY_DOCBLOCK",
    "MemberKind",
    "MemberRecord",
    "ParamRecord",
    "SymbolKind",
]
