# topmark:header:start
#
#   project      : CartSniff
#   file         : exit_codes.py
#   file_relpath : src/cartsniff/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes returned by the ``cartsniff`` command.

Scripts can rely on these to tell a missing ROM from an unreadable one without
parsing messages.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes of the CartSniff CLI, following BSD ``sysexits`` where one applies.

    Attributes:
        SUCCESS: Every ROM was read and classified.
        FAILURE: Generic failure.
        USAGE_ERROR: Invalid flags or arguments (``EX_USAGE``).
        FILE_NOT_FOUND: A ROM path does not exist (``EX_NOINPUT``).
        IO_ERROR: A ROM could not be read (``EX_IOERR``).
        PERMISSION_DENIED: A ROM is not readable by this user (``EX_NOPERM``).
        CONFIG_ERROR: A config file is unreadable or malformed (``EX_CONFIG``).
        UNEXPECTED_ERROR: Last-resort code for unhandled errors.
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 64
    FILE_NOT_FOUND = 66
    IO_ERROR = 74
    PERMISSION_DENIED = 77
    CONFIG_ERROR = 78
    UNEXPECTED_ERROR = 255
