# SPDX-License-Identifier: MIT
"""Verb dispatch.

Each CLI verb maps to a fixed plan of steps that runs once, in order, and
stops at the first failure:

    prepare  provision
    dev      provision, allocate port, run HOT
    prod     provision, run PROD
    serve    allocate port, run SERVE
    upgrade  upgrade
    clean    clean
    unknown  usage

``serve`` does not provision; it expects a previous ``prod`` build on disk.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum, StrEnum, auto
from pathlib import Path

from vulx.core.config import Config
from vulx.core.result import Err, Ok, Result
from vulx.core.workspace import PackageAssets, WorkspaceLayout
from vulx.output.console import ConsoleProtocol, Style
from vulx.platform.ports import PortError, find_free_port
from vulx.platform.process import ProcessError, run_chain, run_silent
from vulx.services.clean import Remover, clean_workspace, remove_tree
from vulx.services.compose import Mode, compose
from vulx.services.errors import BuildError, DispatchError
from vulx.services.provision import ProvisionService
from vulx.services.upgrade import upgrade

__all__ = ["PLANS", "Dispatcher", "Step", "Verb", "parse_verb", "usage_text"]


class Verb(StrEnum):
    PREPARE = "prepare"
    DEV = "dev"
    PROD = "prod"
    SERVE = "serve"
    UPGRADE = "upgrade"
    CLEAN = "clean"
    UNKNOWN = "unknown"


KNOWN_VERBS: tuple[Verb, ...] = tuple(v for v in Verb if v is not Verb.UNKNOWN)


def parse_verb(token: str | None) -> Verb:
    """Map a CLI token to a Verb; anything unrecognised is UNKNOWN."""
    if token is None:
        return Verb.UNKNOWN
    try:
        verb = Verb(token.strip().lower())
    except ValueError:
        return Verb.UNKNOWN
    return verb


def usage_text() -> str:
    return "Invalid command. You can use: vulx " + "|".join(KNOWN_VERBS)


class Step(Enum):
    PROVISION = auto()
    ALLOCATE_PORT = auto()
    RUN_HOT = auto()
    RUN_PROD = auto()
    RUN_SERVE = auto()
    UPGRADE = auto()
    CLEAN = auto()
    USAGE = auto()


PLANS: dict[Verb, tuple[Step, ...]] = {
    Verb.PREPARE: (Step.PROVISION,),
    Verb.DEV: (Step.PROVISION, Step.ALLOCATE_PORT, Step.RUN_HOT),
    Verb.PROD: (Step.PROVISION, Step.RUN_PROD),
    Verb.SERVE: (Step.ALLOCATE_PORT, Step.RUN_SERVE),
    Verb.UPGRADE: (Step.UPGRADE,),
    Verb.CLEAN: (Step.CLEAN,),
    Verb.UNKNOWN: (Step.USAGE,),
}

Allocator = Callable[[int], Result[int, PortError]]
ChainRunner = Callable[[Sequence[Sequence[str]], Path], Result[None, ProcessError]]
Runner = Callable[[Sequence[str], Path], Result[None, ProcessError]]


def _default_chain(steps: Sequence[Sequence[str]], cwd: Path) -> Result[None, ProcessError]:
    return run_chain(steps, cwd=cwd)


def _default_runner(cmd: Sequence[str], cwd: Path) -> Result[None, ProcessError]:
    return run_silent(cmd, cwd=cwd)


def _default_remover(path: Path, force: bool) -> None:
    remove_tree(path, force)


class Dispatcher:
    """Runs the plan of one verb against one project."""

    def __init__(
        self,
        *,
        layout: WorkspaceLayout,
        assets: PackageAssets,
        config: Config,
        console: ConsoleProtocol,
        version: str,
        dry_run: bool = False,
        force: bool = False,
        allocate: Allocator | None = None,
        run_steps: ChainRunner = _default_chain,
        runner: Runner = _default_runner,
        remover: Remover = _default_remover,
    ) -> None:
        self._layout = layout
        self._assets = assets
        self._config = config
        self._console = console
        self._version = version
        self._dry_run = dry_run
        self._force = force
        self._allocate = allocate or self._find_port
        self._run_steps = run_steps
        self._runner = runner
        self._remover = remover
        self._port: int | None = None

    @property
    def port(self) -> int | None:
        """Port allocated by the last dispatch, if its plan needed one."""
        return self._port

    def dispatch(self, verb: Verb) -> Result[None, DispatchError]:
        self._port = None
        for step in PLANS[verb]:
            result = self._execute(step)
            if isinstance(result, Err):
                return result
        return Ok(None)

    def _execute(self, step: Step) -> Result[None, DispatchError]:
        match step:
            case Step.PROVISION:
                return self._provision()
            case Step.ALLOCATE_PORT:
                return self._allocate_port()
            case Step.RUN_HOT:
                return self._build(Mode.HOT)
            case Step.RUN_PROD:
                return self._build(Mode.PROD)
            case Step.RUN_SERVE:
                return self._build(Mode.SERVE)
            case Step.UPGRADE:
                return upgrade(
                    console=self._console,
                    tools=self._config.tools,
                    cwd=self._layout.root,
                    runner=self._runner,
                    dry_run=self._dry_run,
                )
            case Step.CLEAN:
                return self._clean()
            case Step.USAGE:
                self._console.print(usage_text(), Style.WARNING)
                return Ok(None)

    def _provision(self) -> Result[None, DispatchError]:
        self._console.header("Preparing workspace")
        service = ProvisionService(
            layout=self._layout,
            assets=self._assets,
            console=self._console,
            tools=self._config.tools,
            runner=self._runner,
            dry_run=self._dry_run,
        )
        result = service.provision()
        if isinstance(result, Err):
            return result
        self._console.success(f"workspace ready: {self._layout.cache_dir}")
        return Ok(None)

    def _find_port(self, preferred: int) -> Result[int, PortError]:
        server = self._config.server
        return find_free_port(preferred, host=server.host, max_attempts=server.max_attempts)

    def _allocate_port(self) -> Result[None, DispatchError]:
        preferred = self._config.server.port
        result = self._allocate(preferred)
        if isinstance(result, Err):
            return result
        self._port = result.value
        if self._port != preferred:
            self._console.warning(f"port {preferred} is in use, using {self._port}")
        return Ok(None)

    def _build(self, mode: Mode) -> Result[None, DispatchError]:
        command = compose(
            mode,
            self._port,
            self._layout,
            self._config.tools,
            host=self._config.server.host,
        )

        self._console.banner(self._version)
        self._console.print(command.render(), Style.DIM)
        if self._dry_run:
            return Ok(None)

        def failed(error: ProcessError) -> DispatchError:
            return BuildError(
                mode=str(mode),
                command=error.command,
                returncode=error.returncode,
                message=str(error),
            )

        argv = [step.argv for step in command.steps]
        return self._run_steps(argv, self._layout.root).map_err(failed)

    def _clean(self) -> Result[None, DispatchError]:
        result = clean_workspace(
            self._layout,
            console=self._console,
            force=self._force,
            dry_run=self._dry_run,
            remover=self._remover,
        )
        if isinstance(result, Err):
            return result
        self._console.success(f"cleaned {len(result.value)} directories")
        return Ok(None)
