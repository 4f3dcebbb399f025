# topmark:header:start
#
#   project      : MapperFmt
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Pytest configuration for the MapperFmt test suite.

Global fixtures, typed mark wrappers, config builders and fake formatting
engines shared by the pipeline, API and CLI tests.

Notes:
    Tests respect the immutable/mutable configuration split: build with
    `mapperfmt.config.MutableConfig`, then `freeze()` into a
    `mapperfmt.config.Config`. Never mutate a frozen `Config`; use
    `Config.thaw()` and freeze again.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from mapperfmt.config import MutableConfig, logging
from mapperfmt.core.errors import FormatFailure

if TYPE_CHECKING:
    from pathlib import Path

    from mapperfmt.config import Config
    from mapperfmt.config.types import Dialect


F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator

mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_config: DecoratorType[Any] = as_typed_mark(pytest.mark.config)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_mapperfmt_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell environment from changing test output.

    Removes ``MAPPERFMT_LOG_LEVEL`` (log noise on stderr) and the color
    overrides honored by the CLI.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture used to manipulate environment variables.
    """
    monkeypatch.delenv("MAPPERFMT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level so failures come with the full pipeline story."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty project directory with a ``root = true`` config.

    The config stops upward discovery so a ``mapperfmt.toml`` above the
    temporary directory cannot leak into the test.

    Returns:
        Path: The project directory (also the current working directory).
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    (cwd / "mapperfmt.toml").write_text("root = true\n", encoding="utf-8")
    monkeypatch.chdir(cwd)
    return cwd


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return a builder populated with defaults plus ``overrides`` (attribute names)."""
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and ``overrides``."""
    return make_mutable_config(**overrides).freeze()

# --- Fake formatting engines -------------------------------------------------


@dataclass
class IdentityFormatter:
    """Return the statement unchanged; records every call."""

    calls: list[tuple[str, Dialect]] = field(default_factory=lambda: [])

    def format(self, raw_sql: str, dialect: Dialect) -> str:
        self.calls.append((raw_sql, dialect))
        return raw_sql


@dataclass
class CannedFormatter:
    """Return a fixed rendering per input statement (``default`` otherwise)."""

    outputs: dict[str, str] = field(default_factory=lambda: {})
    default: str | None = None

    def format(self, raw_sql: str, dialect: Dialect) -> str:
        if raw_sql in self.outputs:
            return self.outputs[raw_sql]
        return raw_sql if self.default is None else self.default


@dataclass
class KeywordFormatter:
    """Toy engine: one clause per line, upper-case keywords, single spaces.

    Deterministic and idempotent, which makes it suitable for property tests.
    """

    keywords: tuple[str, ...] = ("select", "from", "where", "order", "insert", "values", "set")

    def format(self, raw_sql: str, dialect: Dialect) -> str:
        lines: list[list[str]] = [[]]
        for word in raw_sql.split():
            if word.lower() in self.keywords:
                if lines[-1]:
                    lines.append([])
                word = word.upper()
            lines[-1].append(word)
        return "\n".join(" ".join(line) for line in lines if line)


@dataclass
class FailingFormatter:
    """Reject statements containing ``trigger`` (every statement by default)."""

    trigger: str = ""
    message: str = "syntax error near 'FROM'"

    def format(self, raw_sql: str, dialect: Dialect) -> str:
        if self.trigger in raw_sql:
            raise FormatFailure(self.message)
        return raw_sql
