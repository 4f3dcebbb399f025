# topmark:header:start
#
#   project      : MapperFmt
#   file         : __main__.py
#   file_relpath : src/mapperfmt/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Module entry point for running MapperFmt via ``python -m mapperfmt``.

It delegates directly to :func:`mapperfmt.cli.main.cli`, so there is a single
CLI entry point regardless of how MapperFmt is launched.

Examples:
    Preview the formatting of all mapper files below ``src``::

        python -m mapperfmt check src
"""

from __future__ import annotations

from mapperfmt.cli.main import cli

if __name__ == "__main__":
    cli()
