# topmark:header:start
#
#   project      : MapperFmt
#   file         : __init__.py
#   file_relpath : src/mapperfmt/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Public MapperFmt API (stable surface).

A small, typed API for integrations that want to format mapper files without
going through the CLI. Functions here are thin wrappers around the pipeline
and use the same file discovery and filtering as the CLI.

Configuration contract
----------------------
Public functions accept either a plain **mapping** mirroring the TOML shape,
or a frozen [`mapperfmt.config.Config`][]. A mapping is merged on top of the
discovered configuration before the run:

```python
from mapperfmt import api

run = api.check(
    ["src/main/resources/mapper"],
    config={"format": {"dialect": "postgres"}, "files": {"suffixes": ["Mapper.xml"]}},
)
for result in run.changed:
    print(result.path)
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from mapperfmt.config.logging import get_logger
from mapperfmt.config.model import Config, MutableConfig
from mapperfmt.constants import MAPPERFMT_VERSION
from mapperfmt.core.errors import FormatFailure
from mapperfmt.file_resolver import resolve_file_list
from mapperfmt.pipeline.driver import format_document
from mapperfmt.pipeline.runner import (
    FileResult,
    FileStatus,
    formatter_from_config,
    options_from_config,
    process_file,
    write_result,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from typing import Any

    from mapperfmt.config.logging import MapperfmtLogger
    from mapperfmt.pipeline.formatter import SqlFormatter

logger: MapperfmtLogger = get_logger(__name__)

__all__ = [
    "FileResult",
    "FileStatus",
    "FormatFailure",
    "RunResult",
    "check",
    "format_text",
    "version",
]


@dataclass(frozen=True)
class RunResult:
    """Outcome of an API run.

    Attributes:
        results (tuple[FileResult, ...]): One result per processed file, sorted by path.
        written (tuple[Path, ...]): Files written back (only with ``apply=True``).
    """

    results: tuple[FileResult, ...]
    written: tuple[Path, ...] = field(default_factory=tuple)

    @property
    def changed(self) -> tuple[FileResult, ...]:
        """Results whose formatted text differs from the original."""
        return tuple(r for r in self.results if r.status is FileStatus.CHANGED)

    @property
    def failed(self) -> tuple[FileResult, ...]:
        """Results the engine (or the decoder) rejected."""
        return tuple(r for r in self.results if r.status is FileStatus.FAILED)

    def summary(self) -> dict[str, int]:
        """Return counts per `FileStatus` value (zero counts omitted)."""
        counts: dict[str, int] = {}
        for r in self.results:
            counts[r.status.value] = counts.get(r.status.value, 0) + 1
        return counts


def _resolve_config(
    config: Mapping[str, Any] | Config | None,
    *,
    anchor: Path | None,
    discover: bool,
) -> MutableConfig:
    if isinstance(config, Config):
        return config.thaw()
    draft: MutableConfig = (
        MutableConfig.load_merged(anchor=anchor) if discover else MutableConfig.from_defaults()
    )
    if config:
        draft = draft.merge_with(MutableConfig.from_toml_dict(dict(config)))
    return draft


def format_text(
    text: str,
    config: Mapping[str, Any] | Config | None = None,
    *,
    formatter: SqlFormatter | None = None,
) -> str:
    """Return ``text`` with every statement block reformatted.

    Without ``config`` the built-in defaults are used (no config discovery).

    Args:
        text (str): A mapper document.
        config (Mapping[str, Any] | Config | None): TOML-shaped overrides or a frozen config.
        formatter (SqlFormatter | None): Engine override.

    Returns:
        str: The formatted document (``text`` itself when it holds no statement blocks).

    Raises:
        FormatFailure: If any statement cannot be formatted; no partial output is produced.
    """
    cfg: Config = _resolve_config(config, anchor=None, discover=False).freeze()
    return format_document(
        text, formatter or formatter_from_config(cfg), options=options_from_config(cfg)
    )


def check(
    paths: Iterable[Path | str],
    config: Mapping[str, Any] | Config | None = None,
    *,
    apply: bool = False,
    formatter: SqlFormatter | None = None,
) -> RunResult:
    """Format the mapper files under ``paths``; optionally write the changes.

    Discovery of ``mapperfmt.toml`` / ``pyproject.toml`` starts at the first path.
    Files that fail are reported and left untouched.

    Args:
        paths (Iterable[Path | str]): Files and directories to process.
        config (Mapping[str, Any] | Config | None): TOML-shaped overrides or a frozen config.
        apply (bool): Write changed files back.
        formatter (SqlFormatter | None): Engine override.

    Returns:
        RunResult: Per-file results and the list of written files.
    """
    path_list: list[str] = [str(p) for p in paths]
    anchor: Path | None = Path(path_list[0]) if path_list else None
    draft: MutableConfig = _resolve_config(config, anchor=anchor, discover=True)
    draft.files = path_list
    cfg: Config = draft.freeze()

    engine: SqlFormatter = formatter or formatter_from_config(cfg)
    results: list[FileResult] = [
        process_file(p, cfg, formatter=engine) for p in resolve_file_list(cfg)
    ]

    written: list[Path] = []
    if apply:
        for r in results:
            if r.changed and r.path is not None:
                write_result(r)
                written.append(r.path)
    logger.info("API check: %d file(s), %d written", len(results), len(written))
    return RunResult(results=tuple(results), written=tuple(written))


def version() -> str:
    """Return the installed MapperFmt version."""
    return MAPPERFMT_VERSION
