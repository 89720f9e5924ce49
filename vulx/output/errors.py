"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vulx.core.errors import ErrorCode
from vulx.output.console import Style
from vulx.services.errors import (
    BuildError,
    CleanError,
    DispatchError,
    PortError,
    ProvisionError,
    UpgradeError,
)

if TYPE_CHECKING:
    from vulx.output.console import ConsoleProtocol

__all__ = ["exit_code_for", "print_error"]


def print_error(error: DispatchError, console: ConsoleProtocol) -> None:
    """Print a dispatch error with its underlying message."""
    hint: str | None = None
    match error:
        case ProvisionError(message=message, hint=hint):
            console.error(message)
        case PortError(message=message, hint=hint):
            console.error(message)
        case BuildError(mode=mode, message=message):
            console.error(f"{mode} build failed: {message}")
        case UpgradeError(message=message, hint=hint):
            console.error(f"upgrade failed: {message}")
        case CleanError(failures=failures):
            for failure in failures:
                console.error(f"cannot remove {failure.path}: {failure.reason}")
            hint = "use --force to ignore removal errors"
    if hint:
        console.print(f"hint: {hint}", Style.DIM)


def exit_code_for(error: DispatchError) -> int:
    """Process exit code for a dispatch error.

    A failed delegated build propagates the tool's own exit status.
    """
    match error:
        case ProvisionError(kind="config_missing"):
            return int(ErrorCode.USER_ERROR)
        case ProvisionError(kind="typecheck"):
            return int(ErrorCode.BUILD_ERROR)
        case ProvisionError():
            return int(ErrorCode.IO_ERROR)
        case PortError():
            return int(ErrorCode.NETWORK_ERROR)
        case BuildError(returncode=rc) if rc > 0:
            return rc
        case BuildError():
            return int(ErrorCode.BUILD_ERROR)
        case UpgradeError():
            return int(ErrorCode.ENV_ERROR)
        case CleanError():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.BUILD_ERROR)
