# topmark:header:start
#
#   project      : MapperFmt
#   file         : test_smoke.py
#   file_relpath : tests/cli/test_smoke.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""CLI smoke tests for MapperFmt.

Minimal coverage that the CLI entry point is callable and that ``--help`` and
``version`` succeed.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from mapperfmt.constants import MAPPERFMT_VERSION
from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, run_cli
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from click.testing import Result


@mark_cli
def test_cli_entry() -> None:
    """It should show usage information and exit code SUCCESS when `--help` is passed."""
    result: Result = run_cli(["--help"])

    assert_SUCCESS(result)
    assert "Usage" in result.output
    for command in ("check", "dump-config", "version"):
        assert command in result.output


@mark_cli
def test_bare_invocation_prints_hint_and_help() -> None:
    result: Result = run_cli([])

    assert_SUCCESS(result)
    assert "Hint:" in result.output
    assert "Usage" in result.output


@mark_cli
def test_version() -> None:
    result: Result = run_cli(["version"])

    assert_SUCCESS(result)
    assert result.output.strip() == MAPPERFMT_VERSION


@mark_cli
def test_version_json() -> None:
    result: Result = run_cli(["version", "--format", "json"])

    assert_SUCCESS(result)
    assert json.loads(result.output) == {"version": MAPPERFMT_VERSION}


@mark_cli
def test_verbose_and_quiet_are_exclusive() -> None:
    result: Result = run_cli(["-v", "-q", "version"])

    assert_USAGE_ERROR(result)
