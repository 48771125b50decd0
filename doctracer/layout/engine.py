"""Builds the merged namespace/class/member table from a symbol catalog."""

from __future__ import annotations

from typing import Callable, Dict, List, Mapping

from markupsafe import Markup, escape

from ..catalog import SymbolCatalog, snapshot_of
from ..logging import get_logger
from ..models import ClassRecord, DocBlock, MemberKind, MemberRecord
from .table import Cell, CellRole, LayoutTable, Row, RowKind

DocFormatter = Callable[[DocBlock], Markup]

_MEMBER_ROLES = {
    MemberKind.CONSTANT: (CellRole.CONSTANT, RowKind.CONSTANT),
    MemberKind.PROPERTY: (CellRole.PROPERTY, RowKind.PROPERTY),
    MemberKind.METHOD: (CellRole.METHOD, RowKind.METHOD),
}


def count_class_rows(record: ClassRecord) -> int:
    """Rows a class contributes: zero without members, plus one for its own docblock."""
    if not record.has_members:
        return 0
    members = len(record.constants) + len(record.properties) + len(record.methods)
    return members + (0 if record.docblock.is_empty else 1)


class TableLayoutEngine:
    """Two-pass layout: count rows per group, then emit rows with spans resolved.

    The namespace and class cells appear only on the first row of their
    group, carrying the group's row count as ``row_span``.
    """

    def __init__(self) -> None:
        self.logger = get_logger("layout")

    def build(
        self,
        catalog: "SymbolCatalog | Mapping[str, Mapping[str, ClassRecord]]",
        format_doc: DocFormatter,
    ) -> LayoutTable:
        snapshot = snapshot_of(catalog)
        class_spans, namespace_spans = self._count(snapshot)

        table = LayoutTable()
        for namespace, classes in snapshot.items():
            namespace_cell: Cell | None = Cell(
                css_role=CellRole.NAMESPACE,
                content=escape(namespace),
                row_span=namespace_spans[namespace],
                subject=namespace,
            )
            for short_name, record in classes.items():
                span = class_spans[namespace][short_name]
                if span == 0:
                    continue
                class_cell: Cell | None = Cell(
                    css_role=CellRole.CLASS,
                    content=escape(record.short_name),
                    row_span=span,
                    subject=record,
                )
                for row in self._class_rows(record, format_doc):
                    leading: List[Cell] = []
                    if namespace_cell is not None:
                        leading.append(namespace_cell)
                        namespace_cell = None
                    if class_cell is not None:
                        leading.append(class_cell)
                        class_cell = None
                        row.group_start = True
                    row.cells[:0] = leading
                    table.rows.append(row)

        self.logger.debug("Laid out %d rows across %d namespaces", len(table), len(snapshot))
        return table

    @staticmethod
    def _count(snapshot: Mapping[str, Mapping[str, ClassRecord]]):
        class_spans: Dict[str, Dict[str, int]] = {}
        namespace_spans: Dict[str, int] = {}
        for namespace, classes in snapshot.items():
            spans = {name: count_class_rows(record) for name, record in classes.items()}
            class_spans[namespace] = spans
            namespace_spans[namespace] = sum(spans.values())
        return class_spans, namespace_spans

    def _class_rows(self, record: ClassRecord, format_doc: DocFormatter) -> List[Row]:
        rows: List[Row] = []
        if not record.docblock.is_empty:
            rows.append(
                Row(
                    kind=RowKind.CLASS_SUMMARY,
                    namespace=record.namespace,
                    class_name=record.short_name,
                    cells=[
                        Cell(
                            css_role=CellRole.CLASS_DOCS,
                            content=format_doc(record.docblock),
                            col_span=2,
                            subject=record,
                        )
                    ],
                    docblock=record.docblock,
                )
            )
        for member in record.iter_members():
            rows.append(self._member_row(record, member, format_doc))
        return rows

    @staticmethod
    def _member_row(record: ClassRecord, member: MemberRecord, format_doc: DocFormatter) -> Row:
        role, kind = _MEMBER_ROLES[member.kind]
        empty = member.docblock.is_empty
        return Row(
            kind=kind,
            namespace=record.namespace,
            class_name=record.short_name,
            cells=[
                Cell(css_role=role, content=escape(member.name), subject=member),
                Cell(
                    css_role=CellRole.DOCS,
                    content=Markup("") if empty else format_doc(member.docblock),
                    subject=member,
                    empty=empty,
                ),
            ],
            docblock=member.docblock,
        )


__all__ = ["DocFormatter", "TableLayoutEngine", "count_class_rows"]
