# topmark:header:start
#
#   project      : MapperFmt
#   file         : __init__.py
#   file_relpath : src/mapperfmt/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""SQL statement formatting pipeline for XML mapper documents.

Stages: scanner → extractor → formatter → reconstructor, orchestrated by the
driver. The stages are pure text transformations; file I/O lives in
[`mapperfmt.pipeline.runner`][mapperfmt.pipeline.runner].
"""

from __future__ import annotations
