# topmark:header:start
#
#   project      : MapperFmt
#   file         : errors.py
#   file_relpath : src/mapperfmt/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Exceptions raised by the MapperFmt core.

The core raises synchronously to its single caller and never retries: a SQL
formatting failure is deterministic for a given input. Frontends (CLI, API)
translate these exceptions into exit codes or user-facing messages.
"""

from __future__ import annotations


class MapperfmtError(Exception):
    """Base class for all MapperFmt core errors."""


class FormatFailure(MapperfmtError):
    """The formatting engine rejected a statement.

    A single failure aborts the whole document run; no partially formatted
    document is ever produced.

    Attributes:
        message: Diagnostic message from the formatting engine.
        tag_name: Tag name of the failing statement block (original case), when known.
        line: 1-based line of the failing block's opening tag, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        tag_name: str | None = None,
        line: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.tag_name = tag_name
        self.line = line

    def with_location(self, *, tag_name: str, line: int) -> FormatFailure:
        """Return a copy of this failure annotated with the block location."""
        return FormatFailure(self.message, tag_name=tag_name, line=line)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"<{self.tag_name}> at line {self.line}: {self.message}"


class ConfigError(MapperfmtError):
    """Invalid configuration that cannot be recovered by falling back to defaults."""
