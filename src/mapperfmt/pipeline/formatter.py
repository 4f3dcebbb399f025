# topmark:header:start
#
#   project      : MapperFmt
#   file         : formatter.py
#   file_relpath : src/mapperfmt/pipeline/formatter.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Formatter adapter: the boundary to the SQL pretty-printing engine.

The pipeline only depends on the [`SqlFormatter`][mapperfmt.pipeline.formatter.SqlFormatter]
protocol: raw statement text plus a dialect in, canonically formatted text out,
or a [`FormatFailure`][mapperfmt.core.errors.FormatFailure]. The engine is an
injected capability, so the pipeline can be exercised with fake formatters.

[`SqlglotFormatter`][mapperfmt.pipeline.formatter.SqlglotFormatter] is the
production engine, backed by ``sqlglot``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol

import sqlglot
from sqlglot.errors import SqlglotError

from mapperfmt.config.logging import get_logger
from mapperfmt.config.types import Dialect, FunctionCase
from mapperfmt.core.errors import FormatFailure

if TYPE_CHECKING:
    from sqlglot import Expression

    from mapperfmt.config.logging import MapperfmtLogger

logger: MapperfmtLogger = get_logger(__name__)

__all__ = [
    "Dialect",
    "FunctionCase",
    "SqlFormatter",
    "SqlglotFormatter",
    "protect_placeholders",
    "restore_placeholders",
]


class SqlFormatter(Protocol):
    """Format one raw SQL statement for a dialect.

    Implementations perform no text manipulation of their own beyond what the
    engine requires; they raise `FormatFailure` when the engine rejects the input.
    """

    def format(self, raw_sql: str, dialect: Dialect) -> str:
        """Return the canonical multi-line rendering of ``raw_sql``."""
        ...


# Mapper parameter placeholders: #{id}, #{name,jdbcType=VARCHAR}, ${table}
PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[#$]\{[^{}]*\}")
_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"__mfp_(\d+)__")


def protect_placeholders(raw_sql: str) -> tuple[str, list[str]]:
    """Swap mapper placeholders for inert identifiers the engine can parse.

    In MySQL ``#`` starts a comment, so ``#{id}`` must never reach the parser.

    Returns:
        tuple[str, list[str]]: The rewritten SQL and the placeholders, indexed by token number.
    """
    saved: list[str] = []

    def _swap(m: re.Match[str]) -> str:
        saved.append(m.group(0))
        return f"__mfp_{len(saved) - 1}__"

    return PLACEHOLDER_PATTERN.sub(_swap, raw_sql), saved


def restore_placeholders(sql: str, saved: list[str]) -> str:
    """Put the placeholders removed by `protect_placeholders` back in place."""
    if not saved:
        return sql

    def _restore(m: re.Match[str]) -> str:
        index = int(m.group(1))
        return saved[index] if index < len(saved) else m.group(0)

    return _TOKEN_PATTERN.sub(_restore, sql)


@dataclass(frozen=True)
class SqlglotFormatter:
    """Formatting engine backed by ``sqlglot`` (pretty mode, upper-case keywords).

    Attributes:
        leading_comma (bool): Put commas at the start of continuation lines.
        max_text_width (int): Line width the engine tries to stay within.
        normalize_functions (FunctionCase): Case applied to function names.
    """

    leading_comma: bool = False
    max_text_width: int = 80
    normalize_functions: FunctionCase = FunctionCase.UPPER

    def format(self, raw_sql: str, dialect: Dialect) -> str:
        """Return the pretty-printed rendering of ``raw_sql``.

        Args:
            raw_sql (str): One statement (or a few, separated by ``;``).
            dialect (Dialect): Dialect used both to read and to write the SQL.

        Returns:
            str: Formatted SQL; statements are joined by ``;`` and a newline.

        Raises:
            FormatFailure: If the engine cannot parse or render the statement.
        """
        if not raw_sql.strip():
            return ""

        protected, saved = protect_placeholders(raw_sql)
        try:
            expressions: list[Expression | None] = sqlglot.parse(protected, read=dialect.value)
            rendered: list[str] = [
                expression.sql(
                    dialect=dialect.value,
                    pretty=True,
                    leading_comma=self.leading_comma,
                    max_text_width=self.max_text_width,
                    normalize_functions=(
                        False
                        if self.normalize_functions is FunctionCase.NONE
                        else self.normalize_functions.value
                    ),
                )
                for expression in expressions
                if expression is not None
            ]
        except SqlglotError as exc:
            logger.debug("sqlglot rejected statement: %s", exc)
            raise FormatFailure(str(exc)) from exc

        formatted: str = ";\n".join(rendered)
        logger.trace("sqlglot (%s): %r -> %r", dialect.value, raw_sql, formatted)
        return restore_placeholders(formatted, saved)
