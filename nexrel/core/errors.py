"""Exit codes for the nexrel CLI.

The host process owns the exit status; these values are what the CLI maps
release errors onto and should remain stable for CI scripts.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (missing options, bad config, bad version)
    - 2: Environment error (working tree dirty, metadata file unreadable)
    - 3: Release error (an external tool failed mid-pipeline)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    RELEASE_ERROR = 3
