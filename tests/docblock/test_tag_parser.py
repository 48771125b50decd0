"""Tests for doctracer.docblock.parser."""

from __future__ import annotations

import pytest

from doctracer.docblock.parser import TagParser, parse_docblock
from doctracer.docblock.tags import GenericTag, ParamTag, TagClass, TypedTag, tag_class
from doctracer.models import DocBlock


def test_parse_returns_empty_docblock_for_missing_comment() -> None:
    for raw in (None, "", "   \n  "):
        docblock = TagParser().parse(raw)
        assert isinstance(docblock, DocBlock)
        assert docblock.summary == ""
        assert docblock.description == ""
        assert docblock.tags == {}
        assert docblock.is_empty


def test_parse_param_tag_extracts_type_variable_and_description() -> None:
    docblock = parse_docblock(
        """
        /**
         * Greets someone.
         *
         * @param string $name description text
         */
        """
    )

    (tag,) = docblock.tags["param"]
    assert isinstance(tag, ParamTag)
    assert tag.type == "string"
    assert tag.variable == "name"
    assert tag.description == "description text"
    assert tag.rendered == "string $name description text"


def test_parse_splits_summary_description_and_tags() -> None:
    docblock = parse_docblock(
        """/**
         * Say hello to your neighbour.
         *
         * Bring some food if necessary.
         * It's one of a good excuse to start a conversation.
         *
         * @param  string $name   No harm to ask if you don't know
         *
         * @return string         Remember, smile.. :)
         */"""
    )

    assert docblock.summary == "Say hello to your neighbour."
    assert docblock.description == (
        "Bring some food if necessary.\nIt's one of a good excuse to start a conversation."
    )
    assert list(docblock.tags) == ["param", "return"]
    (returns,) = docblock.tags["return"]
    assert isinstance(returns, TypedTag)
    assert returns.type == "string"
    assert returns.description == "Remember, smile.. :)"


def test_summary_ends_at_first_tag_without_blank_line() -> None:
    docblock = parse_docblock("/**\n * Increment\n * @return int\n */")

    assert docblock.summary == "Increment"
    assert docblock.description == ""
    assert isinstance(docblock.tags["return"][0], TypedTag)


def test_single_line_comment_with_only_a_tag() -> None:
    docblock = parse_docblock("/** @var int */")

    assert docblock.summary == ""
    (tag,) = docblock.tags["var"]
    assert isinstance(tag, TypedTag)
    assert tag.type == "int"
    assert tag.description == ""
    assert not docblock.is_empty


def test_tags_keep_source_order_within_kind_and_first_seen_kind_order() -> None:
    docblock = parse_docblock(
        """/**
         * Summary.
         *
         * @author First <a@example.com>
         * @param int $a
         * @author Second <b@example.com>
         * @param int $b
         * @throws \\RuntimeException
         */"""
    )

    assert list(docblock.tags) == ["author", "param", "throws"]
    assert [tag.rendered for tag in docblock.tags["author"]] == [
        "First <a@example.com>",
        "Second <b@example.com>",
    ]
    assert [tag.variable for tag in docblock.tags["param"]] == ["a", "b"]
    (throws,) = docblock.tags["throws"]
    assert isinstance(throws, TypedTag)
    assert throws.type == "\\RuntimeException"


def test_generic_tag_keeps_verbatim_text_without_name() -> None:
    docblock = parse_docblock(
        "/**\n * @link      [Markdown basic](https://daringfireball.net/projects/markdown/basics)\n */"
    )

    (tag,) = docblock.tags["link"]
    assert isinstance(tag, GenericTag)
    assert tag.rendered == "[Markdown basic](https://daringfireball.net/projects/markdown/basics)"


def test_malformed_typed_tag_degrades_to_generic_tag() -> None:
    docblock = parse_docblock(
        """/**
         * Title.
         *
         * @return    [type]    Show invalid tags as is
         */"""
    )

    assert docblock.summary == "Title."
    assert docblock.description == ""
    (tag,) = docblock.tags["return"]
    assert isinstance(tag, GenericTag)
    assert tag.rendered == "[type]    Show invalid tags as is"


def test_malformed_param_tag_degrades_to_generic_tag() -> None:
    docblock = parse_docblock("/**\n * @param {broken $x\n */")

    (tag,) = docblock.tags["param"]
    assert isinstance(tag, GenericTag)
    assert tag.rendered == "{broken $x"


def test_param_without_variable_is_kept() -> None:
    docblock = parse_docblock("/**\n * @param string just text\n */")

    (tag,) = docblock.tags["param"]
    assert isinstance(tag, ParamTag)
    assert tag.type == "string"
    assert tag.variable == ""
    assert tag.description == "just text"


def test_param_without_type_is_kept() -> None:
    docblock = parse_docblock("/**\n * @param $value The value\n */")

    (tag,) = docblock.tags["param"]
    assert isinstance(tag, ParamTag)
    assert tag.type == ""
    assert tag.variable == "value"
    assert tag.description == "The value"


def test_param_variadic_and_reference_markers() -> None:
    docblock = parse_docblock("/**\n * @param mixed ...$args\n * @param array &$items\n */")

    variadic, reference = docblock.tags["param"]
    assert variadic.variable == "args"
    assert variadic.variadic is True
    assert variadic.signature == "...$args"
    assert reference.variable == "items"
    assert reference.by_reference is True
    assert reference.signature == "&$items"


def test_union_and_generic_types_stay_in_one_token() -> None:
    docblock = parse_docblock(
        "/**\n * @param array<string, int>|null $map Lookup\n * @return string|null\n */"
    )

    (param,) = docblock.tags["param"]
    assert param.type == "array<string, int>|null"
    assert param.types == ["array<string, int>", "null"]
    assert param.variable == "map"
    assert param.description == "Lookup"
    assert docblock.tags["return"][0].types == ["string", "null"]


def test_tag_lines_inside_fenced_code_belong_to_description() -> None:
    docblock = parse_docblock(
        """/**
         * Summary.
         *
         * ```php
         * @param not a tag
         * ```
         *
         * @see https://en.wikipedia.org/wiki/Docblock
         */"""
    )

    assert "@param not a tag" in docblock.description
    assert list(docblock.tags) == ["see"]


def test_continuation_lines_extend_the_open_tag() -> None:
    docblock = parse_docblock(
        "/**\n * @return string The greeting,\n *     spread over two lines.\n */"
    )

    (tag,) = docblock.tags["return"]
    assert tag.description == "The greeting,\n    spread over two lines."


def test_empty_typed_tag_degrades_without_raising() -> None:
    docblock = parse_docblock("/**\n * Summary\n * @return\n */")

    (tag,) = docblock.tags["return"]
    assert isinstance(tag, GenericTag)
    assert tag.rendered == ""


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("param", TagClass.PARAM),
        ("var", TagClass.TYPED),
        ("return", TagClass.TYPED),
        ("throws", TagClass.TYPED),
        ("author", TagClass.GENERIC),
        ("not-exist", TagClass.GENERIC),
    ],
)
def test_tag_class_dispatch(name: str, expected: TagClass) -> None:
    assert tag_class(name) is expected


def test_markdown_emphasis_survives_decoration_stripping() -> None:
    docblock = parse_docblock("/** **Bold** summary */")
    assert docblock.summary == "**Bold** summary"

    docblock = parse_docblock("/**\n * Summary.\n *\n **strong** start\n * * list item\n */")
    assert docblock.description == "**strong** start\n* list item"


def test_tag_groups_ignore_name_case() -> None:
    docblock = parse_docblock("/**\n * @Param int $a First\n * @param int $b Second\n * @RETURN bool\n */")

    assert list(docblock.tags) == ["param", "return"]
    first, second = docblock.tags["param"]
    assert isinstance(first, ParamTag)
    assert first.name == "Param"
    assert [first.variable, second.variable] == ["a", "b"]
    assert isinstance(docblock.tags["return"][0], TypedTag)
