"""Foreground subprocess execution with Result-based error handling.

Delegated tools (``tsc``, ``mix``, ``http-server``, ``uv``) run with the
terminal's streams attached, so their progress bars and live logs reach the
user unmodified. Only the exit status is inspected.

Usage:
    result = run_silent(["npx", "tsc", "--version"], cwd=root)
    match result:
        case Ok(_):
            ...
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from vulx.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run_chain", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code; negative for a signal, -1 if it never started.
        stderr: OS error text when the program could not be started.
        started: False when the program could not be launched at all.
    """

    command: tuple[str, ...]
    returncode: int
    stderr: str = ""
    started: bool = True

    @property
    def signaled(self) -> bool:
        return self.started and self.returncode < 0

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if not self.started:
            return f"{cmd_str} could not start: {self.stderr}"
        if self.signaled:
            return f"{cmd_str} terminated by signal {-self.returncode}"
        return f"{cmd_str} failed (exit {self.returncode})"


def _resolve_program(cmd: Sequence[str]) -> list[str]:
    # npx and friends are .cmd shims on Windows; subprocess needs the full path.
    program = shutil.which(cmd[0]) or cmd[0]
    return [program, *cmd[1:]]


def run_silent(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command in the foreground, inheriting stdin/stdout/stderr.

    Blocks until the process exits, which for watch or serve tools means until
    the user interrupts it. Interrupts are delivered to the child by the
    terminal and are not translated here.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(None) on exit 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            _resolve_program(cmd),
            cwd=str(cwd),
            env=env,
            check=False,
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stderr=str(e),
                started=False,
            )
        )

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode))

    return Ok(None)


def run_chain(
    steps: Sequence[Sequence[str]],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Run commands one after another, stopping at the first failure.

    Equivalent to joining the steps with ``&&`` in a shell, without a shell.
    """
    for step in steps:
        result = run_silent(step, cwd=cwd, env=env)
        if isinstance(result, Err):
            return result
    return Ok(None)
