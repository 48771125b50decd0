"""HTML formatting of parsed docblocks.

Summary and description go through the injected markdown function. Each tag
kind becomes a small table whose columns depend on the tag variant.
"""

from __future__ import annotations

from typing import Callable, Iterable, List

from markupsafe import Markup, escape

from ..models import DocBlock
from .tags import DocTag, GenericTag, ParamTag, TypedTag

MarkdownFunction = Callable[[str], str]


def format_docblock(docblock: DocBlock, markdown: MarkdownFunction) -> Markup:
    """Return the documentation markup for a docblock (empty for an empty block)."""
    if docblock.is_empty:
        return Markup("")

    parts: List[Markup] = [
        Markup('<div class="dt-doc-summary">{}</div>').format(Markup(markdown(docblock.summary)))
    ]
    if docblock.description:
        parts.append(
            Markup('<div class="dt-doc-description">{}</div>').format(
                Markup(markdown(docblock.description))
            )
        )

    for kind, tags in docblock.tags.items():
        rows = Markup("").join(format_tag_row(tag) for tag in tags)
        parts.append(
            Markup('<table class="dt-doc-tags-table dt-tags-table-{}">{}</table>').format(kind, rows)
        )

    return Markup("").join(parts)


def format_tag_row(tag: DocTag) -> Markup:
    """Render a single tag as a table row."""
    name_cell = Markup('<td class="dt-doc-tag-name">@{}</td>').format(tag.name)
    if isinstance(tag, ParamTag):
        cells = [
            name_cell,
            Markup('<td class="dt-doc-tag-type">{}</td>').format(format_types(tag.types)),
            Markup('<td class="dt-doc-tag-variable">{}</td>').format(tag.signature),
            Markup('<td class="dt-doc-tag-description">{}</td>').format(tag.description),
        ]
    elif isinstance(tag, TypedTag):
        cells = [
            name_cell,
            Markup('<td class="dt-doc-tag-type">{}</td>').format(format_types(tag.types)),
            Markup('<td class="dt-doc-tag-description">{}</td>').format(tag.description),
        ]
    elif isinstance(tag, GenericTag):
        cells = [
            name_cell,
            Markup('<td class="dt-doc-tag-render">{}</td>').format(tag.rendered),
        ]
    else:  # pragma: no cover - closed set of variants
        raise TypeError(f"Unsupported tag variant: {type(tag).__name__}")
    return Markup("<tr>{}</tr>").format(Markup("").join(cells))


def format_types(types: Iterable[str]) -> Markup:
    """Render union members as separate spans joined by ``|``."""
    spans = [Markup("<span>{}</span>").format(member) for member in types]
    return Markup("<span>|</span>").join(spans)


def escape_text(text: str) -> Markup:
    """Escape free text and keep its line breaks."""
    return Markup("<br>\n").join(escape(line) for line in text.splitlines())


__all__ = ["MarkdownFunction", "escape_text", "format_docblock", "format_tag_row", "format_types"]
