"""CLI entrypoints for doctracer commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Sequence

from .catalog import DuplicateSymbolError
from .config import OUTPUT_FORMATS, ConfigError, DocTracerConfig, load_config
from .introspect import discover_introspectors
from .logging import configure_logging, get_logger
from .orchestrator import DocTracer
from .render.html import HtmlRenderer
from .render.text import render_markdown, render_plain


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "count",
        "help": "Increase log verbosity (-v pipeline details, -vv also malformed docblock tags).",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = 0
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_inspect_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "targets",
        nargs="*",
        help="Directories to inspect, relative to the base directory (defaults to configured targets).",
    )
    parser.add_argument(
        "--base-dir",
        help="Base directory that targets and source files are relative to.",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .doctracer.yml or the directory holding it (defaults to current directory).",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Directory name to skip while walking targets (repeatable).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doctracer",
        description="Generate a browsable API documentation table from symbol metadata.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Inspect targets and write the documentation report.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_inspect_options(build_parser)
    build_parser.add_argument(
        "-o",
        "--output",
        help="File to write (defaults to the configured output, else stdout).",
    )
    build_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help="Report format (defaults to the configured format, else html).",
    )
    build_parser.add_argument("--title", help="Page heading and title.")
    build_parser.add_argument("--tagline", help="Heading tagline.")
    build_parser.add_argument("--footer", help="Footer text.")
    build_parser.add_argument("--theme", help="Theme name used as the html class suffix.")

    list_parser = subparsers.add_parser(
        "list",
        help="Print inspected namespaces and classes with member counts.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_inspect_options(list_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for doctracer commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbosity=args.verbose, log_file=Path(args.log_file) if args.log_file else None
    )
    logger = get_logger("cli")

    try:
        config = load_config(Path(args.config))
        tracer = _inspect(args, config)
    except (FileNotFoundError, NotADirectoryError, ConfigError, DuplicateSymbolError, ValueError) as exc:
        # ManifestError and unknown introspector names are ValueErrors
        parser.exit(1, f"doctracer {args.command} failed: {exc}\n")

    if args.command == "list":
        for line in _summary_lines(tracer):
            print(line)
        return

    output_format = args.format or config.output_format
    if output_format == "json":
        content = tracer.export_json()
    else:
        settings = config.report.settings()
        for name in ("title", "tagline", "footer", "theme"):
            value = getattr(args, name)
            if value is not None:
                setattr(settings, name, value)
        content = tracer.render(settings)

    output = Path(args.output) if args.output else config.output
    if output is None:
        sys.stdout.write(content)
        return
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
    except OSError as exc:
        parser.exit(1, f"doctracer {args.command} failed: cannot write {output}: {exc}\n")
    logger.info("Report written to %s", output)
    print(f"Report written to {_relativize(output)}")


def _inspect(args: argparse.Namespace, config: DocTracerConfig) -> DocTracer:
    base_dir = Path(args.base_dir) if args.base_dir else config.base_dir
    targets: Sequence[str] = args.targets or config.targets
    if not targets:
        raise ValueError("No targets given and none configured")
    exclude: List[str] = [*config.exclude, *args.exclude]

    tracer = DocTracer(
        base_dir,
        introspectors=discover_introspectors(config.introspectors),
        renderer=HtmlRenderer(config.report.templates_dir),
        markdown=render_markdown if config.report.markdown else render_plain,
    )
    for target in targets:
        tracer.inspect(target, exclude)
    return tracer


def _summary_lines(tracer: DocTracer) -> List[str]:
    lines: List[str] = []
    for namespace, classes in tracer.data().items():
        lines.append(namespace or "(global)")
        for record in classes.values():
            lines.append(
                f"  {record.short_name}: {len(record.constants)} constants, "
                f"{len(record.properties)} properties, {len(record.methods)} methods"
            )
    return lines


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
