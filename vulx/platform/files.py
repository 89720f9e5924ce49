"""Filesystem helpers."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

__all__ = ["replace_file", "replace_tree"]


def replace_file(source: Path, target: Path) -> None:
    """Copy ``source`` over ``target`` atomically using temp file + replace.

    The copy keeps the permission bits of ``source``; the temp file itself is
    created owner-only.
    """
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.",
        suffix=".tmp",
        dir=str(target.parent),
    )
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        shutil.copyfile(source, tmp_path)
        shutil.copymode(source, tmp_path)
        os.replace(tmp_path, target)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def replace_tree(source: Path, target: Path) -> None:
    """Copy the ``source`` tree into ``target``, overwriting existing files.

    Files present in ``target`` but not in ``source`` are left alone.
    """
    if not source.is_dir():
        raise NotADirectoryError(f"not a directory: {source}")
    for path in sorted(source.rglob("*")):
        dest = target / path.relative_to(source)
        if path.is_dir():
            dest.mkdir(parents=True, exist_ok=True)
        else:
            replace_file(path, dest)
