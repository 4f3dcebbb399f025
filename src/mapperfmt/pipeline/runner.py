# topmark:header:start
#
#   project      : MapperFmt
#   file         : runner.py
#   file_relpath : src/mapperfmt/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""File runner: apply the document pipeline to files and texts.

The runner is the host side of the pipeline. It reads a document (UTF-8,
line endings preserved exactly), runs the driver, classifies the outcome and
prepares a unified diff. Writing is a separate, explicit step
(`write_result`) so that callers can preview and confirm first.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from mapperfmt.config.logging import get_logger
from mapperfmt.core.errors import FormatFailure
from mapperfmt.pipeline.driver import DocumentOptions, rewrite_document
from mapperfmt.pipeline.formatter import SqlglotFormatter
from mapperfmt.utils.diff import unified_diff

if TYPE_CHECKING:
    from collections.abc import Callable

    from mapperfmt.config.logging import MapperfmtLogger
    from mapperfmt.config.model import Config
    from mapperfmt.pipeline.driver import DocumentRewrite
    from mapperfmt.pipeline.formatter import SqlFormatter

logger: MapperfmtLogger = get_logger(__name__)


class FileStatus(str, Enum):
    """Outcome of processing one document.

    Members carry a short human label; `color` gives the console color.
    """

    UNCHANGED = "unchanged"
    CHANGED = "changed"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function for this status."""
        return cast(
            "Callable[[str], str]",
            {
                FileStatus.UNCHANGED: chalk.green,
                FileStatus.CHANGED: chalk.yellow,
                FileStatus.FAILED: chalk.red_bright,
                FileStatus.SKIPPED: chalk.gray,
            }[self],
        )


@dataclass(frozen=True)
class FileResult:
    """Processing result for one document.

    Attributes:
        path (Path | None): Source file (``None`` for in-memory text).
        status (FileStatus): Outcome classification.
        original (str): Text as read.
        formatted (str | None): Formatted text; ``None`` unless the run succeeded.
        statement_count (int): Number of statement blocks found.
        error (str | None): Failure or skip reason.
        diff (str): Unified diff between ``original`` and ``formatted`` (empty if none).
    """

    path: Path | None
    status: FileStatus
    original: str = ""
    formatted: str | None = None
    statement_count: int = 0
    error: str | None = None
    diff: str = ""

    @property
    def display_path(self) -> str:
        return "<stdin>" if self.path is None else str(self.path)

    @property
    def changed(self) -> bool:
        return self.status is FileStatus.CHANGED

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly summary (texts and diff omitted)."""
        return {
            "path": self.display_path,
            "status": self.status.value,
            "statements": self.statement_count,
            "error": self.error,
        }


def options_from_config(config: Config) -> DocumentOptions:
    """Return the per-document options described by ``config``."""
    return DocumentOptions(
        dialect=config.dialect,
        indent_unit=config.indent_unit,
        unescape_entities=config.unescape_entities,
    )


def formatter_from_config(config: Config) -> SqlFormatter:
    """Return the production formatting engine configured by ``config``."""
    return SqlglotFormatter(
        leading_comma=config.leading_comma,
        max_text_width=config.max_text_width,
        normalize_functions=config.normalize_functions,
    )


def process_text(
    text: str,
    config: Config,
    *,
    formatter: SqlFormatter | None = None,
    path: Path | None = None,
) -> FileResult:
    """Format the statement blocks of one in-memory document.

    Args:
        text (str): The document.
        config (Config): Resolved configuration.
        formatter (SqlFormatter | None): Engine override (defaults to `formatter_from_config`).
        path (Path | None): Source path, used for reporting and diff headers.

    Returns:
        FileResult: ``CHANGED``/``UNCHANGED`` on success, ``FAILED`` when the engine
            rejected a statement (``formatted`` is then ``None``).
    """
    engine: SqlFormatter = formatter or formatter_from_config(config)
    try:
        rewrite: DocumentRewrite = rewrite_document(
            text, engine, options=options_from_config(config)
        )
    except FormatFailure as exc:
        logger.info("Formatting failed for %s: %s", path or "<stdin>", exc)
        return FileResult(path=path, status=FileStatus.FAILED, original=text, error=str(exc))

    status: FileStatus = FileStatus.CHANGED if rewrite.changed else FileStatus.UNCHANGED
    logger.debug(
        "%s: %d statement block(s), %s", path or "<stdin>", rewrite.statement_count, status.value
    )
    return FileResult(
        path=path,
        status=status,
        original=text,
        formatted=rewrite.text,
        statement_count=rewrite.statement_count,
        diff=unified_diff(text, rewrite.text, path=path or "<stdin>") if rewrite.changed else "",
    )


def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8 without translating line endings.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def process_file(
    path: Path,
    config: Config,
    *,
    formatter: SqlFormatter | None = None,
) -> FileResult:
    """Read and format one file; the file itself is never modified here.

    Unreadable files are ``SKIPPED`` and files that are not valid UTF-8 are
    ``FAILED``; both carry the reason in ``error``.
    """
    try:
        text: str = read_text(path)
    except UnicodeDecodeError as exc:
        logger.warning("Cannot decode %s as UTF-8: %s", path, exc)
        return FileResult(path=path, status=FileStatus.FAILED, error=f"not valid UTF-8: {exc}")
    except OSError as exc:
        logger.error("Cannot read %s: %s", path, exc)
        return FileResult(path=path, status=FileStatus.SKIPPED, error=str(exc))
    return process_text(text, config, formatter=formatter, path=path)


def write_result(result: FileResult) -> None:
    """Write the formatted text of ``result`` back to its file.

    Line endings are written exactly as produced (no translation).

    Raises:
        ValueError: If the result has no path or no formatted text.
        OSError: If the file cannot be written.
    """
    if result.path is None or result.formatted is None:
        raise ValueError(f"Nothing to write for {result.display_path} ({result.status.value})")
    with Path(result.path).open("w", encoding="utf-8", newline="") as f:
        f.write(result.formatted)
    logger.debug("Wrote %d character(s) to %s", len(result.formatted), result.path)
