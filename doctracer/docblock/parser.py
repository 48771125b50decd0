"""Structured comment parsing into summary, description and tags."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import EMPTY_DOCBLOCK, DocBlock
from .tags import DocTag, GenericTag, ParamTag, TagClass, TypedTag, tag_class

_TAG_LINE = re.compile(r"^@([A-Za-z_\\][\w\\:-]*)(.*)$", re.DOTALL)
_DECORATION = re.compile(r"^[ \t]*(?:\*(?![^ \t]))?[ \t]?")
_FENCE = re.compile(r"^\s*(```|~~~)")
_VARIABLE = re.compile(r"^(&)?(\.\.\.)?\$([^\W\d]\w*)$")
_TYPE_START = re.compile(r"^(?:\?|\\|\(|[^\W\d]|\$this\b)")
_TYPE_CHARS = re.compile(r"^[\w\\|&?<>,\[\]():{}'\" .$-]+$")
_OPENERS = {"<": ">", "(": ")", "[": "]", "{": "}"}


class TagParser:
    """Turns a raw structured comment into a :class:`DocBlock`.

    Parsing never raises: tags whose body cannot be interpreted are kept as
    :class:`GenericTag` with their verbatim text.
    """

    def __init__(self) -> None:
        self.logger = get_logger("docblock")

    def parse(self, raw_comment: Optional[str]) -> DocBlock:
        if not raw_comment or not raw_comment.strip():
            return EMPTY_DOCBLOCK

        lines = _strip_comment(raw_comment)
        text_lines, tag_chunks = _split_sections(lines)
        summary, description = _split_summary(text_lines)

        tags: Dict[str, List[DocTag]] = {}
        for name, body in tag_chunks:
            tag = self._parse_tag(name, body)
            tags.setdefault(name.lower(), []).append(tag)

        return DocBlock(summary=summary, description=description, tags=tags)

    def _parse_tag(self, name: str, body: str) -> DocTag:
        behaviour = tag_class(name)
        if behaviour is TagClass.PARAM:
            tag = _parse_param(name, body)
        elif behaviour is TagClass.TYPED:
            tag = _parse_typed(name, body)
        else:
            return GenericTag(name=name, rendered=body)

        if isinstance(tag, GenericTag):
            self.logger.debug("Keeping malformed @%s tag verbatim: %r", name, body)
        return tag


_default_parser: TagParser | None = None


def parse_docblock(raw_comment: Optional[str]) -> DocBlock:
    """Parse with a shared :class:`TagParser` instance."""
    global _default_parser
    if _default_parser is None:
        _default_parser = TagParser()
    return _default_parser.parse(raw_comment)


def _strip_comment(raw_comment: str) -> List[str]:
    text = raw_comment.strip()
    if text.startswith("/**"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]

    lines = [_DECORATION.sub("", line, count=1).rstrip() for line in text.splitlines()]
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def _split_sections(lines: Sequence[str]) -> Tuple[List[str], List[Tuple[str, str]]]:
    """Separate free text from tag chunks; non-tag lines continue the open tag."""
    text_lines: List[str] = []
    chunks: List[Tuple[str, List[str]]] = []
    in_fence = False
    for line in lines:
        match = None
        if _FENCE.match(line):
            in_fence = not in_fence
        elif not in_fence:
            match = _TAG_LINE.match(line.lstrip())
        if match:
            chunks.append((match.group(1), [match.group(2)]))
        elif chunks:
            chunks[-1][1].append(line)
        else:
            text_lines.append(line)
    return text_lines, [(name, "\n".join(body).strip()) for name, body in chunks]


def _split_summary(lines: Sequence[str]) -> Tuple[str, str]:
    summary_lines: List[str] = []
    index = 0
    for index, line in enumerate(lines):
        if not line.strip():
            break
        summary_lines.append(line.strip())
    else:
        index = len(lines)
    summary = "\n".join(summary_lines)
    description = "\n".join(lines[index:]).strip()
    return summary, description


def _parse_param(name: str, body: str) -> DocTag:
    first, rest = _split_type(body)
    variable = _VARIABLE.match(first)
    if variable:
        type_expression = ""
        description = rest
    elif not first or _is_type(first):
        type_expression = first
        second, remainder = _split_word(rest)
        variable = _VARIABLE.match(second)
        description = remainder if variable else rest
    else:
        return GenericTag(name=name, rendered=body)

    signature = variable.group(0) if variable else ""
    return ParamTag(
        name=name,
        type=type_expression,
        variable=variable.group(3) if variable else "",
        description=description,
        rendered=" ".join(part for part in (type_expression, signature, description) if part),
        variadic=bool(variable and variable.group(2)),
        by_reference=bool(variable and variable.group(1)),
    )


def _parse_typed(name: str, body: str) -> DocTag:
    first, rest = _split_type(body)
    if not first or not _is_type(first):
        return GenericTag(name=name, rendered=body)
    rendered = f"{first} {rest}" if rest else first
    return TypedTag(name=name, type=first, description=rest, rendered=rendered)


def _split_type(body: str) -> Tuple[str, str]:
    """Split off the leading type token, keeping bracketed spaces inside it."""
    stack: List[str] = []
    for index, char in enumerate(body):
        if char in _OPENERS:
            stack.append(_OPENERS[char])
        elif stack and char == stack[-1]:
            stack.pop()
        elif char.isspace() and not stack:
            return body[:index], body[index:].strip()
    return body, ""


def _split_word(text: str) -> Tuple[str, str]:
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def _is_type(token: str) -> bool:
    if not _TYPE_START.match(token) or not _TYPE_CHARS.match(token):
        return False
    stack: List[str] = []
    for char in token:
        if char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _OPENERS.values():
            if not stack or stack.pop() != char:
                return False
    return not stack


__all__ = ["TagParser", "parse_docblock"]
