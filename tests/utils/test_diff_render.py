# topmark:header:start
#
#   project      : MapperFmt
#   file         : test_diff_render.py
#   file_relpath : tests/utils/test_diff_render.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Tests for unified diff generation and rendering."""

from __future__ import annotations

from mapperfmt.utils.diff import render_patch, unified_diff
from tests.conftest import mark_pipeline


@mark_pipeline
def test_identical_texts_have_no_diff() -> None:
    assert unified_diff("a\nb\n", "a\nb\n") == ""


@mark_pipeline
def test_diff_headers_and_hunks() -> None:
    patch: str = unified_diff("a\nb\n", "a\nB\n", path="m/UserMapper.xml")

    lines: list[str] = patch.splitlines()
    assert lines[0] == "--- m/UserMapper.xml (current)"
    assert lines[1] == "+++ m/UserMapper.xml (formatted)"
    assert "-b" in lines
    assert "+B" in lines


@mark_pipeline
def test_unterminated_last_line_is_terminated() -> None:
    patch: str = unified_diff("a", "b")

    assert patch.endswith("+b\n")
    assert "<stdin> (current)" in patch


@mark_pipeline
def test_render_patch_keeps_every_line_and_shows_control_characters() -> None:
    rendered: str = render_patch(["--- a", "+++ b", "@@ -1 +1 @@", "-x\r", "+y"])

    assert "\\r" in rendered
    for text in ("--- a", "+++ b", "@@ -1 +1 @@", "+y"):
        assert text in rendered


@mark_pipeline
def test_render_patch_line_numbers() -> None:
    rendered: str = render_patch("-a\n+b\n", show_line_numbers=True)

    assert "0001|" in rendered
    assert "0002|" in rendered
