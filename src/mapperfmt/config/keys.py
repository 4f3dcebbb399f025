# topmark:header:start
#
#   project      : MapperFmt
#   file         : keys.py
#   file_relpath : src/mapperfmt/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Canonical TOML section and key names for MapperFmt configuration.

Keys defined here are the external configuration API (``mapperfmt.toml`` and
``[tool.mapperfmt]`` in ``pyproject.toml``); renaming one is a breaking change.
The ordering mirrors ``mapperfmt-default.toml``.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by MapperFmt configuration."""

    # Top-level: stop upward config discovery at this file
    KEY_ROOT: Final[str] = "root"

    # [format]
    SECTION_FORMAT: Final[str] = "format"

    KEY_DIALECT: Final[str] = "dialect"
    KEY_INDENT_WIDTH: Final[str] = "indent_width"
    KEY_USE_TABS: Final[str] = "use_tabs"
    KEY_UNESCAPE_ENTITIES: Final[str] = "unescape_entities"
    KEY_LEADING_COMMA: Final[str] = "leading_comma"
    KEY_MAX_TEXT_WIDTH: Final[str] = "max_text_width"
    KEY_NORMALIZE_FUNCTIONS: Final[str] = "normalize_functions"

    # [files]
    SECTION_FILES: Final[str] = "files"

    KEY_SUFFIXES: Final[str] = "suffixes"
    KEY_INCLUDE_PATTERNS: Final[str] = "include"
    KEY_EXCLUDE_PATTERNS: Final[str] = "exclude"

    # [preview]
    SECTION_PREVIEW: Final[str] = "preview"

    KEY_MAX_CHARS: Final[str] = "max_chars"
