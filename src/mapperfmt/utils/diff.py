# topmark:header:start
#
#   project      : MapperFmt
#   file         : diff.py
#   file_relpath : src/mapperfmt/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Unified diff generation and colorized rendering."""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from yachalk import chalk

from mapperfmt.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from mapperfmt.config.logging import MapperfmtLogger

logger: MapperfmtLogger = get_logger(__name__)


def _terminated_lines(text: str) -> list[str]:
    lines: list[str] = text.splitlines(keepends=True)
    if lines and not lines[-1].endswith(("\n", "\r")):
        lines[-1] += "\n"
    return lines


def unified_diff(original: str, formatted: str, *, path: Path | str = "<stdin>") -> str:
    """Return a unified diff between ``original`` and ``formatted``.

    Line terminators are kept as found in each text; an unterminated last line
    is terminated so hunks stay line-oriented.

    Args:
        original (str): Text before formatting.
        formatted (str): Text after formatting.
        path (Path | str): Name shown in the diff headers.

    Returns:
        str: The diff, or an empty string when the texts are identical.
    """
    if original == formatted:
        return ""
    patch_lines: list[str] = list(
        difflib.unified_diff(
            _terminated_lines(original),
            _terminated_lines(formatted),
            fromfile=f"{path} (current)",
            tofile=f"{path} (formatted)",
            n=3,
        )
    )
    return "".join(patch_lines)


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): A unified diff as **either** a sequence of lines
            **or** a single multiline string.
        show_line_numbers (bool): Whether to prefix output with line numbers.

    Returns:
        str: The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = list(patch)

    def process_line(line: str) -> str:
        # Show control characters explicitly
        content: str = line.replace("\r", "\\r").replace("\n", "\\n")
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.bold.white(content)

    if show_line_numbers:
        return chalk.gray(
            "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
        )
    return chalk.gray("".join(f"{process_line(line)}\n" for line in lines))
