# topmark:header:start
#
#   project      : MapperFmt
#   file         : test_runner.py
#   file_relpath : tests/pipeline/test_runner.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Tests for per-document processing and write-back."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mapperfmt.pipeline.formatter import SqlglotFormatter
from mapperfmt.pipeline.runner import (
    FileResult,
    FileStatus,
    formatter_from_config,
    options_from_config,
    process_file,
    process_text,
    write_result,
)
from tests.conftest import (
    FailingFormatter,
    IdentityFormatter,
    KeywordFormatter,
    make_config,
    mark_pipeline,
)

if TYPE_CHECKING:
    from pathlib import Path

    from mapperfmt.config import Config

DOC: str = '<mapper>\n  <select id="a">select a from t</select>\n</mapper>\n'


@mark_pipeline
def test_changed_document_carries_text_and_diff() -> None:
    result: FileResult = process_text(DOC, make_config(), formatter=KeywordFormatter())

    assert result.status is FileStatus.CHANGED
    assert result.changed
    assert result.statement_count == 1
    assert result.formatted is not None
    assert "<![CDATA[" in result.formatted
    assert result.diff.startswith("--- <stdin> (current)")


@mark_pipeline
def test_document_without_blocks_is_unchanged() -> None:
    result: FileResult = process_text("<mapper/>\n", make_config(), formatter=IdentityFormatter())

    assert result.status is FileStatus.UNCHANGED
    assert result.formatted == "<mapper/>\n"
    assert result.diff == ""


@mark_pipeline
def test_engine_failure_becomes_failed_result() -> None:
    result: FileResult = process_text(DOC, make_config(), formatter=FailingFormatter())

    assert result.status is FileStatus.FAILED
    assert result.formatted is None
    assert result.error is not None
    assert result.error.startswith("<select> at line 2")
    assert result.to_dict() == {
        "path": "<stdin>",
        "status": "failed",
        "statements": 0,
        "error": result.error,
    }


@mark_pipeline
def test_process_and_write_file_keeps_crlf(tmp_path: Path) -> None:
    path: Path = tmp_path / "M.xml"
    path.write_bytes(DOC.replace("\n", "\r\n").encode("utf-8"))

    result: FileResult = process_file(path, make_config(), formatter=KeywordFormatter())
    write_result(result)

    data: bytes = path.read_bytes()
    assert b"<![CDATA[\r\n" in data
    assert b"\n" not in data.replace(b"\r\n", b"")


@mark_pipeline
def test_undecodable_file_fails(tmp_path: Path) -> None:
    path: Path = tmp_path / "bad.xml"
    path.write_bytes(b"<select>\xff</select>")

    result: FileResult = process_file(path, make_config(), formatter=IdentityFormatter())

    assert result.status is FileStatus.FAILED
    assert result.error is not None
    assert "UTF-8" in result.error


@mark_pipeline
def test_unreadable_path_is_skipped(tmp_path: Path) -> None:
    result: FileResult = process_file(tmp_path, make_config(), formatter=IdentityFormatter())

    assert result.status is FileStatus.SKIPPED
    assert result.error


@mark_pipeline
def test_write_result_requires_formatted_text() -> None:
    with pytest.raises(ValueError, match="Nothing to write"):
        write_result(FileResult(path=None, status=FileStatus.FAILED))


@mark_pipeline
def test_config_maps_onto_options_and_engine() -> None:
    cfg: Config = make_config(use_tabs=True, leading_comma=True, max_text_width=100)

    assert options_from_config(cfg).indent_unit == "\t"
    engine = formatter_from_config(cfg)
    assert isinstance(engine, SqlglotFormatter)
    assert engine.leading_comma is True
    assert engine.max_text_width == 100
