# topmark:header:start
#
#   project      : MapperFmt
#   file         : __init__.py
#   file_relpath : src/mapperfmt/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Core types shared by the pipeline, the configuration layer and the CLI.

This package is import-light: it depends only on the standard library,
`yachalk` (for diagnostic colors) and the logging setup.
"""

from __future__ import annotations
