# topmark:header:start
#
#   project      : MapperFmt
#   file         : preview.py
#   file_relpath : src/mapperfmt/utils/preview.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Confirmation previews shown before changes are written."""

from __future__ import annotations

from mapperfmt.constants import DEFAULT_PREVIEW_CHARS, PREVIEW_TRUNCATION_SUFFIX


def truncate(
    text: str,
    limit: int = DEFAULT_PREVIEW_CHARS,
    suffix: str = PREVIEW_TRUNCATION_SUFFIX,
) -> str:
    """Return ``text`` cut to ``limit`` characters, marking the cut with ``suffix``.

    Text of at most ``limit`` characters is returned unchanged.
    """
    if len(text) <= limit:
        return text
    return text[:limit] + suffix


def render_preview(original: str, formatted: str, *, limit: int = DEFAULT_PREVIEW_CHARS) -> str:
    """Return the two-part "before / after" preview, each side truncated to ``limit``."""
    return (
        "Original SQL:\n\n"
        + truncate(original, limit)
        + "\n\nAfter format:\n\n"
        + truncate(formatted, limit)
    )
