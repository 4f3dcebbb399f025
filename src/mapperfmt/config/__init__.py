# topmark:header:start
#
#   project      : MapperFmt
#   file         : __init__.py
#   file_relpath : src/mapperfmt/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Configuration handling for MapperFmt.

Configuration is layered from the bundled defaults, project files
(``mapperfmt.toml`` or ``[tool.mapperfmt]`` in ``pyproject.toml``), explicit
``--config`` files and CLI overrides. See `mapperfmt.config.model`.
"""

from __future__ import annotations

from mapperfmt.config.model import Config, MutableConfig
from mapperfmt.config.types import Dialect, FunctionCase

__all__ = [
    "Config",
    "Dialect",
    "FunctionCase",
    "MutableConfig",
]
