"""Free-text conversion functions injected into the docblock formatter."""

from __future__ import annotations

from urllib.parse import urlsplit

import markdown
from markdown.treeprocessors import Treeprocessor

from ..docblock.formatter import escape_text

_EXTENSIONS = ["fenced_code", "tables"]
_SAFE_SCHEMES = {"", "http", "https", "mailto"}
_URL_ATTRIBUTES = {"a": "href", "img": "src"}


class SafeLinkTreeprocessor(Treeprocessor):
    """Drops link and image targets whose scheme is not http(s) or mailto."""

    def run(self, root):
        for element in root.iter():
            attribute = _URL_ATTRIBUTES.get(element.tag)
            if attribute is None or attribute not in element.attrib:
                continue
            if not is_safe_url(element.attrib[attribute]):
                del element.attrib[attribute]
        return None


def is_safe_url(url: str) -> bool:
    """Relative URLs, fragments and http(s)/mailto targets are safe."""
    # browsers ignore control characters and whitespace inside the scheme
    cleaned = "".join(char for char in url if char > " ")
    try:
        scheme = urlsplit(cleaned).scheme
    except ValueError:
        return False
    return scheme.lower() in _SAFE_SCHEMES


def _build_converter() -> markdown.Markdown:
    converter = markdown.Markdown(extensions=_EXTENSIONS, output_format="html")
    # raw HTML in comments is shown as text, never passed through
    converter.preprocessors.deregister("html_block")
    converter.inlinePatterns.deregister("html")
    converter.treeprocessors.register(SafeLinkTreeprocessor(converter), "safe_links", 0)
    return converter


_converter: markdown.Markdown | None = None


def render_markdown(text: str) -> str:
    """Convert comment text to HTML with raw HTML escaped and unsafe link targets removed."""
    global _converter
    if not text:
        return ""
    if _converter is None:
        _converter = _build_converter()
    return _converter.reset().convert(text)


def render_plain(text: str) -> str:
    """Escape text and keep its line breaks, without markdown processing."""
    return str(escape_text(text))


__all__ = ["SafeLinkTreeprocessor", "is_safe_url", "render_markdown", "render_plain"]
