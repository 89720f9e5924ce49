"""Error codes for CLI exit status.

The numeric values are process exit codes and should remain stable:
- 0: Success
- 1: User error (bad input, missing configuration source)
- 2: Environment error (package manager missing or failing)
- 3: Build error (type-check failed, bundler failed)
- 4: Network error (no free port)
- 5: I/O error (workspace could not be written or removed)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
