"""Pipeline orchestration: inspect directories, then lay out and render."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .catalog import Snapshot, SymbolCatalog
from .docblock.formatter import MarkdownFunction, format_docblock
from .introspect import Introspector, discover_introspectors, select_introspector
from .layout import LayoutTable, TableLayoutEngine
from .logging import get_logger
from .models import ClassRecord
from .render.export import catalog_as_json
from .render.html import HtmlRenderer, ReportSettings
from .render.text import render_markdown
from .scanner import iter_source_files


class DocTracer:
    """Collects symbols from one or more directories and renders the report.

    ``inspect`` calls must run sequentially; each pass is ingested into the
    catalog as a single batch.
    """

    def __init__(
        self,
        base_dir: str | Path,
        *,
        catalog: SymbolCatalog | None = None,
        introspectors: Optional[Iterable[Introspector]] = None,
        layout_engine: TableLayoutEngine | None = None,
        renderer: HtmlRenderer | None = None,
        markdown: MarkdownFunction | None = None,
    ) -> None:
        self.base_dir = Path(base_dir).expanduser().resolve()
        self.catalog = catalog if catalog is not None else SymbolCatalog()
        self.introspectors: List[Introspector] = (
            list(introspectors) if introspectors is not None else discover_introspectors()
        )
        self.layout_engine = layout_engine or TableLayoutEngine()
        self.renderer = renderer or HtmlRenderer()
        self.markdown = markdown or render_markdown
        self.logger = get_logger("orchestrator")

    def inspect(self, target_dir: str | Path, exclude: Sequence[str] = ()) -> "DocTracer":
        """Inspect every supported file below ``target_dir`` (relative to the base dir)."""
        target_path = (self.base_dir / target_dir).resolve()
        if not target_path.exists():
            raise FileNotFoundError(f"Path not found: {target_path}")
        self.logger.info("Inspecting %s", target_path)

        records: List[ClassRecord] = []
        for path in iter_source_files(target_path, self._supports, exclude):
            introspector = select_introspector(self.introspectors, path)
            found = [self._relativize(record) for record in introspector.inspect(path)]
            self.logger.debug("%s: %d symbols", path, len(found))
            records.extend(found)

        self.catalog.ingest(records)
        self.logger.info("Collected %d symbols from %s", len(records), target_path)
        return self

    def data(self) -> Snapshot:
        """Return the accumulated namespace -> class mapping."""
        return self.catalog.snapshot()

    def layout(self, markdown: MarkdownFunction | None = None) -> LayoutTable:
        convert = markdown or self.markdown
        return self.layout_engine.build(
            self.catalog, lambda docblock: format_docblock(docblock, convert)
        )

    def render(self, settings: ReportSettings | None = None) -> str:
        """Return the complete HTML report."""
        return self.renderer.render(self.layout(), settings)

    def export_json(self) -> str:
        return catalog_as_json(self.data())

    def _supports(self, path: Path) -> bool:
        return select_introspector(self.introspectors, path) is not None

    def _relativize(self, record: ClassRecord) -> ClassRecord:
        if not record.source_file:
            return record
        source = Path(record.source_file)
        if not source.is_absolute():
            return record
        try:
            relative = source.relative_to(self.base_dir).as_posix()
        except ValueError:
            return record
        return dataclasses.replace(record, source_file=relative)


__all__ = ["DocTracer"]
