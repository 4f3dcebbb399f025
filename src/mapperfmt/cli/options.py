# topmark:header:start
#
#   project      : MapperFmt
#   file         : options.py
#   file_relpath : src/mapperfmt/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Reusable Click options and parameter types for MapperFmt commands.

Commands stack these decorators so that flags are spelled, typed and
documented the same way everywhere.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, NoReturn, ParamSpec, TypeVar, cast

import click

from mapperfmt.cli.color import ColorMode
from mapperfmt.cli.errors import MapperfmtUsageError
from mapperfmt.config.types import Dialect

if TYPE_CHECKING:
    from collections.abc import Callable

P = ParamSpec("P")
R = TypeVar("R")
E = TypeVar("E", bound=Enum)

#: Click context settings shared by all commands.
CONTEXT_SETTINGS: dict[str, Any] = {
    "help_option_names": ["-h", "--help"],
}


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON document (machine-readable).
      NDJSON: One JSON object per line (machine-readable).

    Machine formats never include ANSI color, diffs or prompts.
    """

    DEFAULT = "default"
    JSON = "json"
    NDJSON = "ndjson"

    @property
    def is_machine(self) -> bool:
        return self in (OutputFormat.JSON, OutputFormat.NDJSON)


class EnumChoiceParam(click.ParamType, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls: type[E] = enum_cls
        self.name: str = enum_cls.__name__.lower()
        self.choices: list[str] = [str(e.value) for e in enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string (case-insensitive) to a member of the Enum."""
        if value is None or isinstance(value, self.enum_cls):
            return cast("E | None", value)
        lookup: dict[str, E] = {str(choice.value).lower(): choice for choice in self.enum_cls}
        key: str = str(value).lower()
        if key in lookup:
            return lookup[key]
        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def get_metavar(self, param: click.Parameter, ctx: click.Context | None = None) -> str:
        return "[" + "|".join(self.choices) + "]"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from ``-v`` and ``-q`` counts.

    Returns:
        int: ``0`` by default, positive with ``-v``, negative with ``-q``.

    Raises:
        MapperfmtUsageError: If both ``-v`` and ``-q`` are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise MapperfmtUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    return verbose_count - quiet_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the mutually exclusive ``-v/--verbose`` and ``-q/--quiet`` counters."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Show more program output (e.g. unchanged files). Repeatable.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Show less program output. Repeatable.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` (auto, always, never) and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config FILE`` (repeatable) and ``--no-config``."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore project config files (mapperfmt.toml, pyproject.toml).",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge, in order.",
    )(f)
    return f


def common_format_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the statement formatting overrides (``--dialect``, ``--indent``, ...)."""
    f = click.option(
        "--dialect",
        "dialect",
        type=EnumChoiceParam(Dialect),
        default=None,
        help=f"SQL dialect ({', '.join(d.value for d in Dialect)}).",
    )(f)
    f = click.option(
        "--indent",
        "indent_width",
        type=click.IntRange(min=0),
        default=None,
        help="Spaces per indentation level inside statement blocks.",
    )(f)
    f = click.option(
        "--tabs/--spaces",
        "use_tabs",
        default=None,
        help="Indent statement bodies with tabs or spaces.",
    )(f)
    f = click.option(
        "--unescape-entities/--no-unescape-entities",
        "unescape_entities",
        default=None,
        help="Decode XML entities in statements without a CDATA section.",
    )(f)
    return f


def common_file_filtering_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--suffix``, ``--include/-i`` and ``--exclude/-e``."""
    f = click.option(
        "--suffix",
        "suffixes",
        multiple=True,
        help="File-name suffix eligible for processing (repeatable; default: .xml).",
    )(f)
    f = click.option(
        "--include",
        "-i",
        "include_patterns",
        multiple=True,
        help="Filter: keep only files matching these glob patterns (intersection).",
    )(f)
    f = click.option(
        "--exclude",
        "-e",
        "exclude_patterns",
        multiple=True,
        help="Filter: remove files matching these glob patterns (subtraction).",
    )(f)
    return f
