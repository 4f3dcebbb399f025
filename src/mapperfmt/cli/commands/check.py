# topmark:header:start
#
#   project      : MapperFmt
#   file         : check.py
#   file_relpath : src/mapperfmt/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""MapperFmt ``check`` command (dry run by default, ``--apply`` to write).

Formats the SQL statement elements (``<select>``, ``<insert>``, ``<update>``,
``<delete>``) of mapper XML files.

Input modes:
  * **Paths mode (default)**: one or more files or directories.
  * **Filter mode**: a single ``-`` reads one document from STDIN and writes
    the formatted document to STDOUT.

Examples:
  Preview which files would change (dry run):

    $ mapperfmt check src/main/resources/mapper

  Show what would change:

    $ mapperfmt check --diff .

  Write changes after confirming each file:

    $ mapperfmt check --apply .

  Use as an editor filter:

    $ mapperfmt check - < UserMapper.xml > UserMapper.formatted.xml
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mapperfmt.cli.console import ClickConsole
from mapperfmt.cli.errors import (
    MapperfmtDataError,
    MapperfmtFileNotFoundError,
    MapperfmtIOError,
    MapperfmtUsageError,
)
from mapperfmt.cli.exit_codes import ExitCode
from mapperfmt.cli.options import (
    CONTEXT_SETTINGS,
    EnumChoiceParam,
    OutputFormat,
    common_config_options,
    common_file_filtering_options,
    common_format_options,
)
from mapperfmt.cli.utils import (
    build_config,
    console_has_color,
    emit_config_diagnostics,
    emit_diffs,
    emit_machine_output,
    get_effective_verbosity,
    render_per_file_results,
    render_summary_counts,
)
from mapperfmt.config.logging import get_logger
from mapperfmt.file_resolver import find_missing_paths, resolve_file_list
from mapperfmt.pipeline.runner import (
    FileStatus,
    formatter_from_config,
    process_file,
    process_text,
    write_result,
)
from mapperfmt.utils.diff import render_patch
from mapperfmt.utils.preview import render_preview

if TYPE_CHECKING:
    from pathlib import Path

    from mapperfmt.cli.console import ConsoleLike
    from mapperfmt.config.logging import MapperfmtLogger
    from mapperfmt.config.model import Config
    from mapperfmt.config.types import Dialect
    from mapperfmt.pipeline.formatter import SqlFormatter
    from mapperfmt.pipeline.runner import FileResult

logger: MapperfmtLogger = get_logger(__name__)


@click.command(
    name="check",
    help="Format SQL in mapper XML files (dry-run). Use --apply to write changes.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # Preview which files would change (dry-run)
  mapperfmt check src

  # Apply: confirm and write each changed file
  mapperfmt check --apply .

  # Apply without prompting
  mapperfmt check --apply --yes .
""",
)
@click.argument("paths", nargs=-1, type=str)
@common_config_options
@common_format_options
@common_file_filtering_options
@click.option(
    "--apply", "apply_changes", is_flag=True, help="Write changes to files (off by default)."
)
@click.option(
    "--yes",
    "-y",
    "assume_yes",
    is_flag=True,
    help="With --apply: write without asking for confirmation per file.",
)
@click.option("--diff", is_flag=True, help="Show unified diffs (human output only).")
@click.option(
    "--summary",
    "summary_mode",
    is_flag=True,
    help="Show outcome counts instead of per-file details.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def check_command(
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
    apply_changes: bool,
    assume_yes: bool,
    diff: bool,
    summary_mode: bool,
    output_format: OutputFormat | None,
) -> None:
    """Format the statement elements of mapper files.

    Args:
        paths (tuple[str, ...]): Files and directories to process, or a single ``-``.
        no_config (bool): Skip project config discovery.
        config_paths (tuple[str, ...]): Extra config files merged in order.
        dialect (Dialect | None): SQL dialect override.
        indent_width (int | None): Indentation width override.
        use_tabs (bool | None): Tabs/spaces override.
        unescape_entities (bool | None): Entity decoding override.
        suffixes (tuple[str, ...]): Applicable file-name suffixes override.
        include_patterns (tuple[str, ...]): Include glob patterns (added to config).
        exclude_patterns (tuple[str, ...]): Exclude glob patterns (added to config).
        apply_changes (bool): Write changes; otherwise dry run.
        assume_yes (bool): Skip the per-file confirmation with ``--apply``.
        diff (bool): Show unified diffs.
        summary_mode (bool): Show outcome counts instead of per-file lines.
        output_format (OutputFormat | None): ``default``, ``json`` or ``ndjson``.

    Raises:
        MapperfmtUsageError: For invalid flag combinations or missing input.
        MapperfmtFileNotFoundError: If a path does not exist.
        MapperfmtDataError: In filter mode, if the document cannot be formatted.
        MapperfmtIOError: In filter mode, if STDIN cannot be read.

    Exit Status:
        SUCCESS (0): Nothing to change, or every change was written.
        WOULD_CHANGE (2): Files would change (dry run, or confirmation declined).
        DATA_ERROR (65): A statement could not be formatted, or a file is not UTF-8.
        FILE_NOT_FOUND (66): A path does not exist.
        IO_ERROR (74): A file could not be read or written.
        CONFIG_ERROR (78): Invalid configuration.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    verbosity: int = get_effective_verbosity(ctx)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt.is_machine:
        if diff:
            raise MapperfmtUsageError(
                f"{ctx.command.name}: --diff is not supported with machine-readable output formats."
            )
        if apply_changes and not assume_yes:
            raise MapperfmtUsageError(
                f"{ctx.command.name}: --apply with --format {fmt.value} requires --yes."
            )
        # Machine output is never colored
        console = ClickConsole(enable_color=False)
        ctx.obj["console"] = console

    if not paths:
        raise MapperfmtUsageError(f"{ctx.command.name}: no PATHS given (use '-' for STDIN).")
    stdin_mode: bool = "-" in paths
    if stdin_mode and len(paths) > 1:
        raise MapperfmtUsageError(f"{ctx.command.name}: '-' must be the only PATH.")
    if stdin_mode and fmt.is_machine:
        raise MapperfmtUsageError(
            f"{ctx.command.name}: '-' writes the formatted document; --format {fmt.value} "
            "is not supported."
        )

    config: Config = build_config(
        paths=paths,
        no_config=no_config,
        config_paths=config_paths,
        overrides={
            "files": [] if stdin_mode else list(paths),
            "apply_changes": apply_changes,
            "dialect": dialect.value if dialect is not None else None,
            "indent_width": indent_width,
            "use_tabs": use_tabs,
            "unescape_entities": unescape_entities,
            "suffixes": list(suffixes),
            "include_patterns": list(include_patterns),
            "exclude_patterns": list(exclude_patterns),
        },
    )
    emit_config_diagnostics(config, verbosity=verbosity)
    formatter: SqlFormatter = formatter_from_config(config)

    if stdin_mode:
        _run_filter(console, config, formatter, diff=diff)
        return

    missing: list[Path] = find_missing_paths(config)
    if missing:
        raise MapperfmtFileNotFoundError(
            "No such file or directory: " + ", ".join(str(p) for p in missing)
        )

    file_list: list[Path] = resolve_file_list(config)
    if not file_list:
        if not fmt.is_machine:
            console.warn("No mapper files to process.")
        else:
            emit_machine_output([], fmt=fmt, summary_mode=summary_mode, config=config)
        return

    results: list[FileResult] = [process_file(p, config, formatter=formatter) for p in file_list]

    if fmt.is_machine:
        emit_machine_output(results, fmt=fmt, summary_mode=summary_mode, config=config)
    else:
        if summary_mode:
            render_summary_counts(results)
        else:
            render_per_file_results(results, verbosity=verbosity)
        if diff:
            emit_diffs(results)

    written: int = 0
    write_failed: bool = False
    if apply_changes:
        for r in results:
            if not r.changed:
                continue
            if not assume_yes and not _confirm_write(console, r, config):
                logger.info("Skipped %s (not confirmed)", r.display_path)
                continue
            try:
                write_result(r)
            except OSError as exc:
                logger.error("Failed to write %s: %s", r.display_path, exc)
                console.error(f"Failed to write {r.display_path}: {exc}")
                write_failed = True
                continue
            written += 1
        if not fmt.is_machine and verbosity >= 0:
            console.print(f"Wrote {written} file(s).")

    ctx.exit(_exit_code(results, written=written, write_failed=write_failed))


def _confirm_write(console: ConsoleLike, result: FileResult, config: Config) -> bool:
    console.print(console.styled(f"=== {result.display_path} ===", bold=True))
    console.print(
        render_preview(result.original, result.formatted or "", limit=config.preview_max_chars)
    )
    return click.confirm(f"Apply formatting to {result.display_path}?", default=False)


def _exit_code(results: list[FileResult], *, written: int, write_failed: bool) -> ExitCode:
    """Most severe outcome wins: data errors, then I/O errors, then pending changes."""
    if any(r.status is FileStatus.FAILED for r in results):
        return ExitCode.DATA_ERROR
    if write_failed or any(r.status is FileStatus.SKIPPED and r.error for r in results):
        return ExitCode.IO_ERROR
    n_changed: int = sum(1 for r in results if r.changed)
    if n_changed > written:
        return ExitCode.WOULD_CHANGE
    return ExitCode.SUCCESS


def _run_filter(
    console: ConsoleLike, config: Config, formatter: SqlFormatter, *, diff: bool
) -> None:
    """Filter mode: format STDIN to STDOUT (or print the diff with ``--diff``).

    Both streams are handled as bytes so line endings pass through untranslated.
    """
    try:
        text: str = click.get_binary_stream("stdin").read().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MapperfmtDataError(f"<stdin> is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise MapperfmtIOError(f"Cannot read <stdin>: {exc}") from exc
    result: FileResult = process_text(text, config, formatter=formatter)
    if result.status is FileStatus.FAILED:
        raise MapperfmtDataError(f"Failed to format <stdin>: {result.error}")
    if diff:
        console.print(
            render_patch(result.diff) if console_has_color(console) else result.diff,
            nl=False,
        )
        return
    click.echo((result.formatted or "").encode("utf-8"), nl=False)
