# topmark:header:start
#
#   project      : MapperFmt
#   file         : dump_config.py
#   file_relpath : src/mapperfmt/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""MapperFmt ``dump-config`` command.

Prints the effective configuration (defaults, discovered project files,
``--config`` files and CLI overrides, merged) as TOML. With ``--defaults`` it
prints the bundled, annotated default configuration instead, which is a good
starting point for a project ``mapperfmt.toml``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mapperfmt.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_file_filtering_options,
    common_format_options,
)
from mapperfmt.cli.utils import build_config, emit_config_diagnostics, get_effective_verbosity
from mapperfmt.config.model import MutableConfig

if TYPE_CHECKING:
    from mapperfmt.cli.console import ConsoleLike
    from mapperfmt.config.model import Config
    from mapperfmt.config.types import Dialect


@click.command(
    name="dump-config",
    help="Print the effective MapperFmt configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1, type=str)
@common_config_options
@common_format_options
@common_file_filtering_options
@click.option(
    "--defaults",
    "show_defaults",
    is_flag=True,
    help="Print the bundled default configuration (with comments) instead.",
)
def dump_config_command(
    *,
    paths: tuple[str, ...],
    no_config: bool,
    config_paths: tuple[str, ...],
    dialect: Dialect | None,
    indent_width: int | None,
    use_tabs: bool | None,
    unescape_entities: bool | None,
    suffixes: tuple[str, ...],
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    show_defaults: bool,
) -> None:
    """Print the effective (or default) configuration as TOML.

    ``PATHS`` only anchor config discovery here; no file is read or formatted.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if show_defaults:
        console.print(MutableConfig.get_default_config_toml(), nl=False)
        return

    config: Config = build_config(
        paths=paths,
        no_config=no_config,
        config_paths=config_paths,
        overrides={
            "dialect": dialect.value if dialect is not None else None,
            "indent_width": indent_width,
            "use_tabs": use_tabs,
            "unescape_entities": unescape_entities,
            "suffixes": list(suffixes),
            "include_patterns": list(include_patterns),
            "exclude_patterns": list(exclude_patterns),
        },
    )
    emit_config_diagnostics(config, verbosity=get_effective_verbosity(ctx))
    console.print(config.to_toml(), nl=False)
