# topmark:header:start
#
#   project      : MapperFmt
#   file         : __init__.py
#   file_relpath : src/mapperfmt/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""MapperFmt package.

MapperFmt reformats the SQL statements embedded in XML mapper files. It
locates ``<select>``, ``<insert>``, ``<update>`` and ``<delete>`` blocks with a
text-level scanner, pretty-prints each statement and splices the result back
into the document, leaving every other byte untouched. It exposes both a CLI
and a small typed API for automation.
"""

from __future__ import annotations
