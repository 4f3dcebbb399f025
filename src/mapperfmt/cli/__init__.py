# topmark:header:start
#
#   project      : MapperFmt
#   file         : __init__.py
#   file_relpath : src/mapperfmt/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Click-based command line interface for MapperFmt."""
