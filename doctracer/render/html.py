"""Full-page HTML report rendering with Jinja2 templates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from importlib import metadata
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ..layout.table import LayoutTable

DEFAULT_TITLE = "DocTracer"
DEFAULT_TAGLINE = "API documentation generator"


@dataclass
class ReportSettings:
    """Page-level settings of the HTML report."""

    title: str = DEFAULT_TITLE
    tagline: str = DEFAULT_TAGLINE
    footer: str = ""
    theme: str = "default"
    custom_style: str = ""

    @property
    def footer_text(self) -> str:
        return self.footer or f"{self.title} - {self.tagline}"


class HtmlRenderer:
    """Renders a :class:`LayoutTable` as a standalone HTML page.

    Free text is escaped by the template engine; documentation cells arrive
    pre-formatted as markup.
    """

    NOT_AVAILABLE = "n/a"

    def __init__(self, templates_dir: Path | None = None) -> None:
        self._env = self._create_env(templates_dir)

    def render(
        self,
        table: LayoutTable,
        settings: ReportSettings | None = None,
        *,
        created: datetime | None = None,
    ) -> str:
        settings = settings or ReportSettings()
        template = self._env.get_template("report.html.j2")
        return template.render(
            table=table,
            settings=settings,
            version=package_version(),
            created=(created or datetime.now(UTC)).replace(microsecond=0).isoformat(),
            not_available=self.NOT_AVAILABLE,
        )

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=True, trim_blocks=True, lstrip_blocks=True)


def package_version() -> str:
    try:
        return metadata.version("doctracer")
    except metadata.PackageNotFoundError:
        return "0+unknown"


__all__ = ["DEFAULT_TAGLINE", "DEFAULT_TITLE", "HtmlRenderer", "ReportSettings", "package_version"]
