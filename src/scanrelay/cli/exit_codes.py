"""Exit codes for scanrelay commands."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    # A scan or availability check failed on at least one target
    OPERATION_FAILED = 1
    # Invalid configuration, rewrite rules, or unreachable library list
    CONFIG_ERROR = 2
