"""Row and cell structures of the merged report table."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Optional

from markupsafe import Markup

from ..models import DocBlock, EMPTY_DOCBLOCK


class CellRole(str, Enum):
    """What a cell shows; the value doubles as the CSS class suffix."""

    NAMESPACE = "namespace"
    CLASS = "class"
    CLASS_DOCS = "class-docs"
    CONSTANT = "constant"
    PROPERTY = "property"
    METHOD = "method"
    DOCS = "docblock"

    @property
    def css_class(self) -> str:
        return f"dt-{self.value}"


class RowKind(str, Enum):
    CLASS_SUMMARY = "class-summary"
    CONSTANT = "constant"
    PROPERTY = "property"
    METHOD = "method"


@dataclass
class Cell:
    """One table cell.

    ``subject`` is the object the cell describes (namespace name, class or
    member record); ``empty`` marks a documentation cell whose docblock has
    nothing to show.
    """

    css_role: CellRole
    content: Markup
    row_span: int = 1
    col_span: int = 1
    subject: Any = None
    empty: bool = False


@dataclass
class Row:
    """A table row with the group keys it belongs to."""

    kind: RowKind
    namespace: str
    class_name: str
    cells: List[Cell] = field(default_factory=list)
    group_start: bool = False
    docblock: DocBlock = EMPTY_DOCBLOCK

    def cell(self, role: CellRole) -> Optional[Cell]:
        for cell in self.cells:
            if cell.css_role is role:
                return cell
        return None


@dataclass
class LayoutTable:
    """Ordered rows of the report table."""

    rows: List[Row] = field(default_factory=list)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __bool__(self) -> bool:
        return bool(self.rows)


__all__ = ["Cell", "CellRole", "LayoutTable", "Row", "RowKind"]
