# topmark:header:start
#
#   project      : MapperFmt
#   file         : constants.py
#   file_relpath : src/mapperfmt/constants.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""MapperFmt Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

MAPPERFMT_VERSION: str = get_version("mapperfmt")

# Name of the bundled default config inside the package `mapperfmt.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "mapperfmt.config"
DEFAULT_TOML_CONFIG_NAME: str = "mapperfmt-default.toml"

# Project config discovery
PROJECT_CONFIG_NAME: str = "mapperfmt.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "mapperfmt"

LOG_LEVEL_ENV_VAR: str = "MAPPERFMT_LOG_LEVEL"

# Statement tags recognized by the block scanner (matched case-insensitively)
STATEMENT_TAGS: Final[tuple[str, ...]] = ("select", "insert", "update", "delete")

# Escaping wrapper (XML CDATA section)
CDATA_START: Final[str] = "<![CDATA["
CDATA_END: Final[str] = "]]>"

DEFAULT_INDENT_UNIT: Final[str] = "    "
DEFAULT_PREVIEW_CHARS: Final[int] = 500
PREVIEW_TRUNCATION_SUFFIX: Final[str] = "\n...(too long)"

VALUE_NOT_SET: str = "<not set>"
