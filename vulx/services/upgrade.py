"""Self-upgrade to the latest preview release."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from vulx.core.config import ToolsConfig
from vulx.core.result import Ok, Result
from vulx.output.console import ConsoleProtocol, Style
from vulx.platform.process import ProcessError, run_silent
from vulx.services.compose import upgrade_command
from vulx.services.errors import UpgradeError

__all__ = ["upgrade"]


def _default_runner(cmd: Sequence[str], cwd: Path) -> Result[None, ProcessError]:
    return run_silent(cmd, cwd=cwd)


def upgrade(
    *,
    console: ConsoleProtocol,
    tools: ToolsConfig | None = None,
    cwd: Path | None = None,
    runner: Callable[[Sequence[str], Path], Result[None, ProcessError]] = _default_runner,
    dry_run: bool = False,
) -> Result[None, UpgradeError]:
    """Reinstall vulx through ``uv tool``; no workspace is touched."""
    cmd = upgrade_command(tools)
    console.print(cmd.render(), Style.DIM)
    if dry_run:
        return Ok(None)

    def failed(error: ProcessError) -> UpgradeError:
        hint = None if error.started else "install uv: https://docs.astral.sh/uv/"
        return UpgradeError(command=tuple(cmd.argv), message=str(error), hint=hint)

    return runner(cmd.argv, cwd or Path.cwd()).map_err(failed)
