# topmark:header:start
#
#   project      : MapperFmt
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""CLI test helpers for running MapperFmt in a controlled working directory.

`run_cli_in()` changes the process working directory to a temporary project
before invoking the Click CLI, so relative paths and include/exclude patterns
resolve against the test directory. Engine fixtures swap the production SQL
engine for a deterministic fake.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result

from mapperfmt.cli.exit_codes import ExitCode
from mapperfmt.cli.main import cli
from tests.conftest import FailingFormatter, KeywordFormatter

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

MAPPER_TEXT: str = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<mapper namespace="com.example.UserMapper">\n'
    '    <select id="findById" resultType="User">\n'
    "        select id, name from user where id = #{id}\n"
    "    </select>\n"
    "</mapper>\n"
)


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with ``tmp_path`` as the working directory.

    Args:
        tmp_path (Path): Directory used as the CWD for the invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["check", "."]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input (filter
            mode, confirmation answers).

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.
    """
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return run_cli(argv, input_text=input_text)
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory."""
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text, obj={})


def assert_SUCCESS(result: Result) -> None:
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_WOULD_CHANGE(result: Result) -> None:
    # WOULD_CHANGE is a *normal* outcome; do not assert on exception.
    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


@pytest.fixture
def keyword_engine(monkeypatch: pytest.MonkeyPatch) -> KeywordFormatter:
    """Make ``check`` use the deterministic keyword engine."""
    engine = KeywordFormatter()
    monkeypatch.setattr(
        "mapperfmt.cli.commands.check.formatter_from_config", lambda config: engine
    )
    return engine


@pytest.fixture
def failing_engine(monkeypatch: pytest.MonkeyPatch) -> FailingFormatter:
    """Make ``check`` use an engine that rejects every statement."""
    engine = FailingFormatter()
    monkeypatch.setattr(
        "mapperfmt.cli.commands.check.formatter_from_config", lambda config: engine
    )
    return engine


@pytest.fixture
def mapper_file(isolation: Path) -> Path:
    """``res/UserMapper.xml`` inside the isolated project (relative paths work)."""
    path: Path = isolation / "res" / "UserMapper.xml"
    path.parent.mkdir()
    path.write_text(MAPPER_TEXT, encoding="utf-8")
    return path
