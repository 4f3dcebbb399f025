# topmark:header:start
#
#   project      : MapperFmt
#   file         : conftest.py
#   file_relpath : tests/pipeline/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Helpers for pipeline tests."""

from __future__ import annotations

from mapperfmt.pipeline.scanner import Match, RegexBlockScanner


def scan_all(text: str) -> list[Match]:
    """Return every statement block the default scanner finds in ``text``."""
    return list(RegexBlockScanner().scan(text))


def make_match(
    *,
    indent: str = "    ",
    tag: str = "select",
    attrs: str = ' id="findAll"',
    inner: str = "",
) -> Match:
    """Build a `Match` without scanning (span is irrelevant to reconstruction)."""
    return Match(
        leading_indent=indent, tag_name=tag, attributes=attrs, inner_content=inner, span=(0, 0)
    )
