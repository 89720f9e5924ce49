"""Failure kinds surfaced by the orchestration services."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from vulx.platform.ports import PortError

__all__ = [
    "BuildError",
    "CleanError",
    "CleanFailure",
    "DispatchError",
    "PortError",
    "ProvisionError",
    "UpgradeError",
]


@dataclass(frozen=True, slots=True)
class ProvisionError:
    """The workspace could not be prepared.

    ``io``: a directory or template copy failed.
    ``config_missing``: the user's configuration source does not exist.
    ``typecheck``: the type-checker rejected the configuration source.
    """

    kind: Literal["io", "config_missing", "typecheck"]
    message: str
    path: Path | None = None
    returncode: int | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class BuildError:
    """The bundler (or the static server chained after it) failed."""

    mode: str
    command: tuple[str, ...]
    returncode: int
    message: str


@dataclass(frozen=True, slots=True)
class UpgradeError:
    command: tuple[str, ...]
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class CleanFailure:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class CleanError:
    """One or more directories could not be removed."""

    failures: tuple[CleanFailure, ...]
    removed: tuple[Path, ...] = ()

    @property
    def message(self) -> str:
        return "; ".join(f"{f.path}: {f.reason}" for f in self.failures)


DispatchError = ProvisionError | PortError | BuildError | UpgradeError | CleanError
