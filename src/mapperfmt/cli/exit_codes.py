# topmark:header:start
#
#   project      : MapperFmt
#   file         : exit_codes.py
#   file_relpath : src/mapperfmt/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Exit codes for the MapperFmt CLI.

MapperFmt aligns with the BSD `sysexits` convention where practical, so that
other tooling can interpret failures consistently. The one deliberate
divergence is `WOULD_CHANGE=2`, used by dry runs that found files to
reformat; Click's own usage errors also exit with 2, so tests distinguish the
two by checking the output (or ``result.exception``).
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the MapperFmt CLI.

    Attributes:
        SUCCESS: Nothing to change, or all requested changes were written.
        FAILURE: Generic failure (prefer a more specific code).
        WOULD_CHANGE: Dry run: files would be reformatted with ``--apply``.
        USAGE_ERROR: Invalid invocation (flags/arguments). BSD ``EX_USAGE``.
        DATA_ERROR: A statement could not be formatted, or a file is not valid
            UTF-8. BSD ``EX_DATAERR``.
        FILE_NOT_FOUND: An input path does not exist. BSD ``EX_NOINPUT``.
        IO_ERROR: A file could not be read or written. BSD ``EX_IOERR``.
        PERMISSION_DENIED: Insufficient permissions. BSD ``EX_NOPERM``.
        CONFIG_ERROR: Missing or invalid configuration. BSD ``EX_CONFIG``.
        UNEXPECTED_ERROR: Unhandled error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # deliberate divergence from sysexits; see module docstring

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
