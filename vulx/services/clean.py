"""Workspace reset: remove the hidden workspace and installed dependencies.

Each directory is removed independently. Without ``force`` every failure is
reported, including a directory that does not exist; the remaining
directories are still attempted. With ``force`` removal errors are ignored.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import stat
from collections.abc import Callable
from pathlib import Path

from vulx.core.result import Err, Ok, Result
from vulx.core.workspace import WorkspaceLayout
from vulx.output.console import ConsoleProtocol, Style
from vulx.services.errors import CleanError, CleanFailure

__all__ = ["clean_targets", "clean_workspace", "remove_tree"]

Remover = Callable[[Path, bool], None]


def _force_handler(top: Path) -> Callable[[Callable[..., object], str, BaseException], None]:
    """Build an rmtree error handler that unlocks denied entries under ``top``.

    A denied entry and its parent are made owner-writable, then the entry is
    unlinked, or removed recursively when it is a directory that could not be
    opened or listed. Each entry is retried once and the parent of ``top`` is
    never touched. Remaining errors are dropped.
    """
    retried: set[Path] = set()

    def handle(func: Callable[..., object], path: str, exc: BaseException) -> None:
        entry = Path(path)
        if not isinstance(exc, PermissionError) or entry in retried:
            return
        retried.add(entry)
        with contextlib.suppress(OSError):
            if entry != top:
                entry.parent.chmod(stat.S_IRWXU)
            if entry.is_symlink():
                entry.unlink()
                return
            entry.chmod(stat.S_IRWXU)
            if func is os.rmdir:
                entry.rmdir()
            elif entry.is_dir():
                shutil.rmtree(entry, onexc=handle)
            else:
                entry.unlink()

    return handle


def remove_tree(path: Path, force: bool) -> None:
    """Remove ``path`` recursively.

    Raises:
        OSError: Removal failed and ``force`` is False.
    """
    if force:
        shutil.rmtree(path, onexc=_force_handler(path))
        return
    shutil.rmtree(path)


def clean_targets(layout: WorkspaceLayout) -> tuple[Path, ...]:
    return (layout.cache_dir, layout.dependencies_dir)


def clean_workspace(
    layout: WorkspaceLayout,
    *,
    console: ConsoleProtocol,
    force: bool = False,
    dry_run: bool = False,
    remover: Remover = remove_tree,
) -> Result[tuple[Path, ...], CleanError]:
    """Remove the workspace and dependency directories.

    Returns:
        Ok(removed paths), or Err(CleanError) listing every failure alongside
        what was removed before it.
    """
    removed: list[Path] = []
    failures: list[CleanFailure] = []

    for target in clean_targets(layout):
        if dry_run:
            console.print(f"rm -r{'f' if force else ''} {target}", Style.DIM)
            continue
        if force and not target.exists():
            continue
        try:
            remover(target, force)
        except FileNotFoundError:
            failures.append(CleanFailure(target, "no such directory"))
            continue
        except OSError as e:
            failures.append(CleanFailure(target, e.strerror or str(e)))
            continue
        removed.append(target)
        console.print(f"removed {target}", Style.DIM)

    if failures and not force:
        return Err(CleanError(failures=tuple(failures), removed=tuple(removed)))
    return Ok(tuple(removed))
