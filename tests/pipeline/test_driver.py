# topmark:header:start
#
#   project      : MapperFmt
#   file         : test_driver.py
#   file_relpath : tests/pipeline/test_driver.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Tests for the document driver (scan, extract, format, reconstruct)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mapperfmt.config.types import Dialect
from mapperfmt.core.errors import FormatFailure
from mapperfmt.pipeline.driver import (
    DocumentOptions,
    detect_newline,
    format_document,
    rewrite_document,
)
from mapperfmt.pipeline.scanner import Match
from tests.conftest import (
    CannedFormatter,
    FailingFormatter,
    IdentityFormatter,
    KeywordFormatter,
    mark_pipeline,
    parametrize,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mapperfmt.pipeline.driver import DocumentRewrite


MAPPER: str = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<mapper namespace="com.example.UserMapper">\n'
    '    <select id="findAll" resultType="User">\n'
    "        select * from user\n"
    "    </select>\n"
    "</mapper>\n"
)


@mark_pipeline
def test_single_block_is_rewritten_in_place() -> None:
    formatter = CannedFormatter({"select * from user": "SELECT\n  *\nFROM user"})

    out: str = format_document(MAPPER, formatter)

    assert out == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<mapper namespace="com.example.UserMapper">\n'
        '    <select id="findAll" resultType="User">\n'
        "        <![CDATA[\n"
        "        SELECT\n"
        "        *\n"
        "        FROM user\n"
        "        ]]>\n"
        "    </select>\n"
        "</mapper>\n"
    )


@mark_pipeline
def test_text_between_blocks_is_copied_verbatim() -> None:
    text = (
        "<mapper>\n"
        "  <!-- users -->\n"
        '  <insert id="add">insert into t values (1)</insert>\n'
        '  <sql id="cols">a,   b</sql>\n'
        '  <delete id="rm">delete from t</delete>\n'
        "  trailing   text\n"
        "</mapper>"
    )

    result: DocumentRewrite = rewrite_document(text, IdentityFormatter())

    assert result.statement_count == 2
    assert result.text.startswith("<mapper>\n  <!-- users -->\n  <insert")
    assert "\n  </insert>\n  <sql id=\"cols\">a,   b</sql>\n  <delete" in result.text
    assert result.text.endswith("  </delete>\n  trailing   text\n</mapper>")


@mark_pipeline
def test_blocks_are_formatted_in_source_order() -> None:
    formatter = IdentityFormatter()
    text = "<update>update a</update><select>select b</select><delete>delete c</delete>"

    rewrite_document(text, formatter)

    assert [raw for raw, _ in formatter.calls] == ["update a", "select b", "delete c"]


@mark_pipeline
@parametrize(
    "text",
    [
        "",
        "<mapper/>",
        '<mapper>\n  <select id="x">\n    select 1\n</mapper>\n',
        "<mapper><sql id='s'>select 1</sql></mapper>",
    ],
)
def test_documents_without_complete_blocks_pass_through(text: str) -> None:
    formatter = IdentityFormatter()

    result: DocumentRewrite = rewrite_document(text, formatter)

    assert result.text == text
    assert not result.changed
    assert result.blocks == ()
    assert formatter.calls == []


@mark_pipeline
def test_failure_reports_the_offending_block_and_produces_no_output() -> None:
    text = (
        "<mapper>\n"
        '  <select id="ok">select 1</select>\n'
        '  <update id="bad">\n'
        "    update t set a = 1 where\n"
        "  </update>\n"
        "</mapper>\n"
    )

    with pytest.raises(FormatFailure) as info:
        rewrite_document(text, FailingFormatter(trigger="update"))

    failure: FormatFailure = info.value
    assert failure.tag_name == "update"
    assert failure.line == 3
    assert "syntax error" in failure.message
    assert str(failure).startswith("<update> at line 3")


@mark_pipeline
def test_crlf_documents_keep_crlf_line_breaks() -> None:
    text = "<mapper>\r\n  <select>\r\n    select 1\r\n  </select>\r\n</mapper>\r\n"

    out: str = format_document(text, IdentityFormatter())

    assert out == (
        "<mapper>\r\n"
        "  <select>\r\n"
        "      <![CDATA[\r\n"
        "      select 1\r\n"
        "      ]]>\r\n"
        "  </select>\r\n"
        "</mapper>\r\n"
    )


@mark_pipeline
def test_formatting_is_idempotent() -> None:
    text = (
        "<mapper>\n"
        '  <select id="a">select a, b from t where a = #{a} order by b</select>\n'
        '  <insert id="b"><![CDATA[ insert into t (a) values (#{a}) ]]></insert>\n'
        "</mapper>\n"
    )
    formatter = KeywordFormatter()

    once: str = format_document(text, formatter)
    twice: str = format_document(once, formatter)

    assert once != text
    assert twice == once


@mark_pipeline
def test_options_reach_the_engine_and_the_reconstructor() -> None:
    formatter = IdentityFormatter()
    options = DocumentOptions(dialect=Dialect.POSTGRES, indent_unit="\t", unescape_entities=True)

    out: str = format_document("<select>a &lt; b</select>", formatter, options=options)

    assert formatter.calls == [("a < b", Dialect.POSTGRES)]
    assert out == "<select>\n\t<![CDATA[\n\ta < b\n\t]]>\n</select>"


@mark_pipeline
def test_entity_escaped_statement_is_decoded_by_default() -> None:
    text = '<mapper>\n    <select id="x">SELECT a FROM t WHERE a &lt; #{x}</select>\n</mapper>\n'
    formatter = IdentityFormatter()

    out: str = format_document(text, formatter)

    assert formatter.calls[0][0] == "SELECT a FROM t WHERE a < #{x}"
    assert "        SELECT a FROM t WHERE a < #{x}\n" in out
    assert "&lt;" not in out


@mark_pipeline
def test_entity_escaped_statement_fails_when_decoding_is_off() -> None:
    text = '<mapper>\n    <select id="x">SELECT a FROM t WHERE a &lt; #{x}</select>\n</mapper>\n'
    formatter = IdentityFormatter()

    with pytest.raises(FormatFailure) as excinfo:
        format_document(text, formatter, options=DocumentOptions(unescape_entities=False))

    assert excinfo.value.tag_name == "select"
    assert excinfo.value.line == 2
    assert "unescape_entities" in str(excinfo.value)
    assert formatter.calls == []


@mark_pipeline
def test_block_details_are_recorded() -> None:
    result: DocumentRewrite = rewrite_document(
        MAPPER, CannedFormatter({"select * from user": "SELECT * FROM user"})
    )

    (block,) = result.blocks
    assert block.match.tag_name == "select"
    assert block.statement == "select * from user"
    assert block.formatted == "SELECT * FROM user"
    assert result.text.count(block.replacement) == 1


@mark_pipeline
def test_overlapping_scanner_output_is_rejected() -> None:
    class OverlappingScanner:
        def scan(self, text: str) -> Iterator[Match]:
            yield Match("", "select", "", "x", (0, 10))
            yield Match("", "select", "", "y", (5, 12))

    with pytest.raises(ValueError, match="Overlapping"):
        rewrite_document("x" * 20, IdentityFormatter(), scanner=OverlappingScanner())


@mark_pipeline
@parametrize(
    "text, expected",
    [("a\nb", "\n"), ("a\r\nb\n", "\r\n"), ("a\rb", "\r"), ("abc", "\n"), ("", "\n")],
)
def test_detect_newline(text: str, expected: str) -> None:
    assert detect_newline(text) == expected
