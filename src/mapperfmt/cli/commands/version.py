# topmark:header:start
#
#   project      : MapperFmt
#   file         : version.py
#   file_relpath : src/mapperfmt/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""MapperFmt ``version`` command.

Prints the MapperFmt version installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from mapperfmt.cli.options import CONTEXT_SETTINGS, EnumChoiceParam, OutputFormat
from mapperfmt.cli.utils import get_effective_verbosity
from mapperfmt.constants import MAPPERFMT_VERSION

if TYPE_CHECKING:
    from mapperfmt.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of MapperFmt.",
    context_settings=CONTEXT_SETTINGS,
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of MapperFmt.

    Args:
        output_format (OutputFormat | None): Plain text (default) or JSON.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = get_effective_verbosity(ctx)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt.is_machine:
        console.print(json.dumps({"version": MAPPERFMT_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("MapperFmt version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(MAPPERFMT_VERSION, bold=True)}")
    else:
        console.print(console.styled(MAPPERFMT_VERSION, bold=True))
