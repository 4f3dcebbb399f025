# topmark:header:start
#
#   project      : MapperFmt
#   file         : test_extractor.py
#   file_relpath : tests/pipeline/test_extractor.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Tests for statement extraction."""

from __future__ import annotations

from mapperfmt.pipeline.extractor import (
    decode_entities,
    extract_statement,
    has_cdata_wrapper,
    has_entity_references,
)
from tests.conftest import mark_pipeline, parametrize


@mark_pipeline
@parametrize(
    "inner, expected",
    [
        ("\n    select 1\n  ", "select 1"),
        ("\n  <![CDATA[\n    select 1 where a < b\n  ]]>\n", "select 1 where a < b"),
        ("<![CDATA[select 1]]><![CDATA[ union select 2]]>", "select 1 union select 2"),
        ("   ", ""),
        ("", ""),
    ],
)
def test_extract_statement(inner: str, expected: str) -> None:
    assert extract_statement(inner) == expected


@mark_pipeline
def test_every_cdata_marker_is_removed() -> None:
    assert extract_statement("<![CDATA[ a ]]> b <![CDATA[ c ]]>") == "a  b  c"


@mark_pipeline
def test_entities_are_kept_by_default() -> None:
    assert extract_statement("select 1 where a &lt; b") == "select 1 where a &lt; b"


@mark_pipeline
def test_entities_are_decoded_on_request() -> None:
    inner = "\n  select 1 where a &lt; b and c &gt;= 'x&amp;y' and d = &quot;q&quot;\n"

    assert (
        extract_statement(inner, unescape_entities=True)
        == "select 1 where a < b and c >= 'x&y' and d = \"q\""
    )


@mark_pipeline
def test_cdata_content_is_never_unescaped() -> None:
    assert extract_statement("<![CDATA[a &lt; b]]>", unescape_entities=True) == "a &lt; b"


@mark_pipeline
def test_has_cdata_wrapper() -> None:
    assert has_cdata_wrapper("x <![CDATA[ y ]]>")
    assert not has_cdata_wrapper("x ]]> y")


@mark_pipeline
@parametrize(
    "text, expected",
    [
        ("a &#60; b", "a < b"),
        ("a &#x3C; b", "a < b"),
        ("'&amp;lt;'", "'&lt;'"),
        ("a & b &nbsp;", "a & b &nbsp;"),
        ("&#99999999;", "&#99999999;"),
    ],
)
def test_decode_entities_is_single_pass(text: str, expected: str) -> None:
    assert decode_entities(text) == expected


@mark_pipeline
def test_has_entity_references() -> None:
    assert has_entity_references("a &lt; #{x}")
    assert not has_entity_references("a & b")
    assert not has_entity_references("<![CDATA[a &lt; b]]>")
