# topmark:header:start
#
#   project      : MapperFmt
#   file         : errors.py
#   file_relpath : src/mapperfmt/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Exceptions for the MapperFmt CLI.

Raise these in commands to stop with a standardized message and exit code.
They render through the project console when one is available on the Click
context and fall back to Click's default styling otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from mapperfmt.cli.exit_codes import ExitCode


class MapperfmtCliError(click.ClickException):
    """Base class for all MapperFmt CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colors are applied in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class MapperfmtUsageError(MapperfmtCliError):
    """Invalid command-line invocation (flags/arguments)."""

    exit_code = ExitCode.USAGE_ERROR


class MapperfmtDataError(MapperfmtCliError):
    """A statement could not be formatted, or input is not valid UTF-8."""

    exit_code = ExitCode.DATA_ERROR


class MapperfmtConfigError(MapperfmtCliError):
    """Missing or invalid configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class MapperfmtFileNotFoundError(MapperfmtCliError):
    """An input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class MapperfmtIOError(MapperfmtCliError):
    """A file could not be read or written."""

    exit_code = ExitCode.IO_ERROR
