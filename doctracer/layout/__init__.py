"""Table layout of the inspected symbols."""

from .engine import DocFormatter, TableLayoutEngine, count_class_rows
from .table import Cell, CellRole, LayoutTable, Row, RowKind

__all__ = [
    "Cell",
    "CellRole",
    "DocFormatter",
    "LayoutTable",
    "Row",
    "RowKind",
    "TableLayoutEngine",
    "count_class_rows",
]
