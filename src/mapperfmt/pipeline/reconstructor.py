# topmark:header:start
#
#   project      : MapperFmt
#   file         : reconstructor.py
#   file_relpath : src/mapperfmt/pipeline/reconstructor.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Block reconstructor: rebuild a statement element around formatted SQL.

Given the original [`Match`][mapperfmt.pipeline.scanner.Match] and the
formatted statement, the reconstructor emits::

    {indent}<{tag}{attributes}>
    {indent}{unit}<![CDATA[
    {indent}{unit}SELECT ...
    {indent}{unit}FROM ...
    {indent}{unit}]]>
    {indent}</{tag}>

The tag name and attribute text are copied byte-for-byte from the source. The
body is always CDATA-wrapped, so ``<``, ``>`` and ``&`` in SQL cannot corrupt
the surrounding markup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from mapperfmt.constants import CDATA_END, CDATA_START, DEFAULT_INDENT_UNIT

if TYPE_CHECKING:
    from mapperfmt.pipeline.scanner import Match

# A literal "]]>" in the body would close the section early; split it across two sections.
_CDATA_END_ESCAPED: Final[str] = "]]]]><![CDATA[>"


def indent_body(formatted: str, prefix: str) -> list[str]:
    """Split formatted SQL into lines re-indented with ``prefix``.

    The whole text is trimmed first, then every line is trimmed. Non-empty
    lines get ``prefix``; empty lines stay empty.

    Args:
        formatted (str): Formatted SQL as returned by the engine.
        prefix (str): Indentation to prepend to every non-empty line.

    Returns:
        list[str]: The body lines (no line terminators). Empty for blank input.
    """
    text: str = formatted.strip()
    if not text:
        return []
    lines: list[str] = []
    for raw in text.splitlines():
        line: str = raw.strip()
        lines.append(prefix + line if line else "")
    return lines


def build_replacement(
    match: Match,
    formatted: str,
    *,
    indent_unit: str = DEFAULT_INDENT_UNIT,
    newline: str = "\n",
) -> str:
    """Return the replacement text for ``match``'s full span.

    Args:
        match (Match): The located block (indent, tag name, attributes).
        formatted (str): The formatted statement text.
        indent_unit (str): One nesting level, added to the block's own indent.
        newline (str): Line break used between emitted lines.

    Returns:
        str: Opening tag, CDATA-wrapped body and closing tag. There is no
            trailing line break; the text following the span in the source
            keeps its own.
    """
    inner_indent: str = match.leading_indent + indent_unit
    body: list[str] = indent_body(formatted.replace(CDATA_END, _CDATA_END_ESCAPED), inner_indent)
    lines: list[str] = [
        f"{match.leading_indent}<{match.tag_name}{match.attributes}>",
        f"{inner_indent}{CDATA_START}",
        *body,
        f"{inner_indent}{CDATA_END}",
        f"{match.leading_indent}</{match.tag_name}>",
    ]
    return newline.join(lines)
