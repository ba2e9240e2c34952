# topmark:header:start
#
#   project      : cmfront
#   file         : exit_codes.py
#   file_relpath : src/cmfront/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the cmfront CLI.

cmfront aligns with the BSD `sysexits` convention where practical. The exception is a
failing external command: its own exit code is mirrored unchanged, so scripts wrapping
``cm build`` see exactly what the build tool returned.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the cmfront CLI.

    Attributes:
        SUCCESS: Successful execution (all planned commands succeeded, or dry run).
        FAILURE: Generic failure, e.g. a planned program could not be started.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: Malformed input data (unreadable ResultDB where it is required).
            Mirrors BSD ``EX_DATAERR (65)``.
        UNAVAILABLE: A feature probe failed for a reason other than "not found".
            Mirrors BSD ``EX_UNAVAILABLE (69)``.
        CONFIG_ERROR: Unreadable or undecodable explicit config file. Mirrors BSD
            ``EX_CONFIG (78)``.
        UNKNOWN_CHILD_STATUS: A planned command failed without an exit code (killed by
            a signal). The process exits with 255.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    UNAVAILABLE = 69  # EX_UNAVAILABLE
    CONFIG_ERROR = 78  # EX_CONFIG

    UNKNOWN_CHILD_STATUS = -1
