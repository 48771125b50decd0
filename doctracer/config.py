"""Configuration loading for doctracer (.doctracer.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .render.html import DEFAULT_TAGLINE, DEFAULT_TITLE, ReportSettings

CONFIG_FILENAME = ".doctracer.yml"
OUTPUT_FORMATS = ("html", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ReportConfig:
    """Page settings from the ``report`` section."""

    title: str = DEFAULT_TITLE
    tagline: str = DEFAULT_TAGLINE
    footer: str = ""
    theme: str = "default"
    custom_style: str = ""
    markdown: bool = True
    templates_dir: Optional[Path] = None

    def settings(self) -> ReportSettings:
        return ReportSettings(
            title=self.title,
            tagline=self.tagline,
            footer=self.footer,
            theme=self.theme,
            custom_style=self.custom_style,
        )


@dataclass
class DocTracerConfig:
    """Represents the settings defined in .doctracer.yml."""

    root: Path
    base_dir: Path
    targets: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    introspectors: Optional[List[str]] = None
    output: Optional[Path] = None
    output_format: str = "html"
    report: ReportConfig = field(default_factory=ReportConfig)


def load_config(config_path: Path) -> DocTracerConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocTracerConfig(root=root, base_dir=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    base_dir_str = _as_str(data.get("base_dir"))
    base_dir = (root / base_dir_str).resolve() if base_dir_str else root

    output_str = _as_str(data.get("output"))
    output = root / output_str if output_str else None

    output_format = (_as_str(data.get("format")) or "html").lower()
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Unsupported output format {output_format!r}; expected one of {', '.join(OUTPUT_FORMATS)}"
        )

    introspectors = None
    if data.get("introspectors") is not None:
        introspectors = _as_str_list(data.get("introspectors"))

    report = ReportConfig()
    report_data = _as_dict(data.get("report"))
    if report_data:
        report.title = _as_str(report_data.get("title")) or report.title
        report.tagline = _as_str(report_data.get("tagline")) or report.tagline
        report.footer = _as_str(report_data.get("footer")) or ""
        report.theme = _as_str(report_data.get("theme")) or report.theme
        report.custom_style = _as_str(report_data.get("custom_style")) or ""
        markdown = _as_bool(report_data.get("markdown"))
        report.markdown = True if markdown is None else markdown
        templates_dir_str = _as_str(report_data.get("templates_dir"))
        report.templates_dir = root / templates_dir_str if templates_dir_str else None

    return DocTracerConfig(
        root=root,
        base_dir=base_dir,
        targets=_as_str_list(data.get("targets")),
        exclude=_as_str_list(data.get("exclude")),
        introspectors=introspectors,
        output=output,
        output_format=output_format,
        report=report,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "DocTracerConfig", "ReportConfig", "load_config"]
