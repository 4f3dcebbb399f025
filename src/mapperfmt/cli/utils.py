# topmark:header:start
#
#   project      : MapperFmt
#   file         : utils.py
#   file_relpath : src/mapperfmt/cli/utils.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Shared helpers for MapperFmt CLI commands.

Config assembly from Click options, and the human and machine renderers used
by ``check``. Everything here writes through the project console.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from mapperfmt.cli.console import ClickConsole
from mapperfmt.cli.errors import MapperfmtConfigError
from mapperfmt.cli.options import OutputFormat
from mapperfmt.config.logging import get_logger
from mapperfmt.config.model import MutableConfig
from mapperfmt.constants import MAPPERFMT_VERSION
from mapperfmt.core.diagnostics import compute_diagnostic_stats
from mapperfmt.core.errors import ConfigError
from mapperfmt.pipeline.runner import FileStatus
from mapperfmt.utils.diff import render_patch

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mapperfmt.cli.console import ConsoleLike
    from mapperfmt.config.logging import MapperfmtLogger
    from mapperfmt.config.model import Config
    from mapperfmt.config.types import ArgsLike
    from mapperfmt.pipeline.runner import FileResult

logger: MapperfmtLogger = get_logger(__name__)


def get_console_safely() -> ConsoleLike:
    """Return the console of the active Click context (plain console otherwise)."""
    ctx: click.Context | None = click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict) and "console" in ctx.obj:
        console: ConsoleLike = ctx.obj["console"]
        return console
    return ClickConsole(enable_color=False)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity resolved by the group (0 = default)."""
    return int((ctx.obj or {}).get("verbosity_level", 0))


def build_config(
    *,
    paths: Sequence[str],
    no_config: bool,
    config_paths: Sequence[str],
    overrides: ArgsLike,
) -> Config:
    """Discover, merge and freeze the configuration for a command.

    Discovery starts at the first real path argument (CWD when there is none
    or it is ``-``).

    Raises:
        MapperfmtConfigError: If an explicit config file is missing or an
            override is invalid.
    """
    anchor: Path | None = next((Path(p) for p in paths if p != "-"), None)
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            anchor=anchor,
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        )
        draft.apply_cli_args(overrides)
    except ConfigError as exc:
        raise MapperfmtConfigError(str(exc)) from exc
    config: Config = draft.freeze()
    logger.trace("Effective config: %s", config)
    return config


def emit_config_diagnostics(config: Config, *, verbosity: int) -> None:
    """Print configuration diagnostics to stderr (suppressed with ``-q``)."""
    if verbosity < 0 or not config.diagnostics:
        return
    console: ConsoleLike = get_console_safely()
    stats = compute_diagnostic_stats(config.diagnostics)
    console.warn(f"Configuration: {stats.total} diagnostic(s)")
    for d in config.diagnostics:
        console.warn(f"  [{d.level.value}] {d.message}")


def render_per_file_results(results: Sequence[FileResult], *, verbosity: int) -> None:
    """Print one line per file; unchanged files only with ``-v``."""
    console: ConsoleLike = get_console_safely()
    for r in results:
        if r.status is FileStatus.UNCHANGED and verbosity <= 0:
            continue
        label: str = r.status.value
        if console_has_color(console):
            label = r.status.color(label)
        line: str = f"{r.display_path}: {label}"
        if r.error:
            line += f" ({r.error})"
        elif r.statement_count and verbosity > 0:
            line += f" [{r.statement_count} statement(s)]"
        console.print(line)


def render_summary_counts(results: Sequence[FileResult]) -> None:
    """Print aligned counts per outcome."""
    console: ConsoleLike = get_console_safely()
    console.print(console.styled("Summary by outcome:", bold=True, underline=True))
    counts: dict[FileStatus, int] = {}
    for r in results:
        counts[r.status] = counts.get(r.status, 0) + 1
    label_width: int = max((len(s.value) for s in counts), default=0) + 1
    num_width: int = len(str(len(results)))
    for status in FileStatus:
        n: int = counts.get(status, 0)
        if not n:
            continue
        line: str = f"  {status.value:<{label_width}}: {n:>{num_width}}"
        console.print(status.color(line) if console_has_color(console) else line)


def emit_diffs(results: Sequence[FileResult]) -> None:
    """Print the unified diff of every changed file."""
    console: ConsoleLike = get_console_safely()
    for r in results:
        if not r.diff:
            continue
        console.print(render_patch(r.diff) if console_has_color(console) else r.diff, nl=False)


def console_has_color(console: ConsoleLike) -> bool:
    return bool(getattr(console, "enable_color", False))


def build_meta_payload() -> dict[str, str]:
    """Return tool name, version and platform for machine output."""
    return {"tool": "mapperfmt", "version": MAPPERFMT_VERSION, "platform": sys.platform}


def emit_machine_output(
    results: Sequence[FileResult],
    *,
    fmt: OutputFormat,
    summary_mode: bool,
    config: Config,
) -> None:
    """Print results as JSON (one envelope) or NDJSON (one record per line).

    Machine output never includes ANSI color or diffs.
    """
    console: ConsoleLike = get_console_safely()
    meta: dict[str, str] = build_meta_payload()
    diagnostics: list[dict[str, str]] = [
        {"level": d.level.value, "message": d.message} for d in config.diagnostics
    ]
    summary: dict[str, int] = {}
    for r in results:
        summary[r.status.value] = summary.get(r.status.value, 0) + 1

    if fmt is OutputFormat.JSON:
        envelope: dict[str, Any] = {"meta": meta, "config_diagnostics": diagnostics}
        if summary_mode:
            envelope["summary"] = summary
        else:
            envelope["results"] = [r.to_dict() for r in results]
        console.print(json.dumps(envelope, indent=2))
        return

    console.print(json.dumps({"kind": "meta", "meta": meta}))
    for d in diagnostics:
        console.print(json.dumps({"kind": "config_diagnostic", **d}))
    if summary_mode:
        for key, n in summary.items():
            console.print(json.dumps({"kind": "summary", "key": key, "count": n}))
    else:
        for r in results:
            console.print(json.dumps({"kind": "result", **r.to_dict()}))
