# topmark:header:start
#
#   project      : MapperFmt
#   file         : types.py
#   file_relpath : src/mapperfmt/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Lightweight config types and aliases.

This module hosts stable, import-friendly definitions that other modules can
depend on without risk of circular imports. It is stdlib-only.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

# Plain-dict view of a TOML table (after `tomlkit` unwrapping).
TomlTable = dict[str, Any]


class Dialect(str, Enum):
    """SQL dialects the formatting engine can target.

    One dialect is configured per run; there is no detection.
    """

    MYSQL = "mysql"
    POSTGRES = "postgres"
    ORACLE = "oracle"
    TSQL = "tsql"
    SQLITE = "sqlite"
    HIVE = "hive"

    @classmethod
    def from_name(cls, name: str) -> Dialect:
        """Return the dialect named ``name`` (case-insensitive).

        Raises:
            ValueError: If ``name`` is not a supported dialect.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            supported: str = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown SQL dialect {name!r} (supported: {supported})") from None


class FunctionCase(str, Enum):
    """Case applied to function names by the formatting engine."""

    UPPER = "upper"
    LOWER = "lower"
    NONE = "none"
