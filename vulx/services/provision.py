# SPDX-License-Identifier: MIT
"""Workspace provisioning.

Provisioning is idempotent. Directories are created when missing, and every
template is copied again on each run, so the workspace always reflects the
installed vulx version even when it was created by an older one. The
user's configuration source is then compiled into the workspace; a rejected
configuration aborts the verb before any build runs.

Partial state left by a failed run is not rolled back: the next successful
run overwrites it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from vulx.core.config import ToolsConfig
from vulx.core.result import Err, Ok, Result
from vulx.core.workspace import PackageAssets, WorkspaceLayout
from vulx.output.console import ConsoleProtocol, Style
from vulx.platform.files import replace_file, replace_tree
from vulx.platform.process import ProcessError, run_silent
from vulx.services.compose import typecheck_command
from vulx.services.errors import ProvisionError

__all__ = ["ProvisionService", "TemplateCopy", "provision", "template_plan"]

Runner = Callable[[Sequence[str], Path], Result[None, ProcessError]]


@dataclass(frozen=True, slots=True)
class TemplateCopy:
    source: Path
    target: Path
    recursive: bool = False


def template_plan(layout: WorkspaceLayout, assets: PackageAssets) -> list[TemplateCopy]:
    """Every template copied into the workspace, in copy order."""
    return [
        TemplateCopy(assets.mix_config, layout.mix_config_path),
        TemplateCopy(assets.tsconfig, layout.types_dir / "tsconfig.json"),
        TemplateCopy(assets.vue_shims, layout.types_dir / "vue-shims.d.ts"),
        TemplateCopy(assets.env_types, layout.types_dir / "env.d.ts"),
        TemplateCopy(assets.config_helper, layout.config_helper_path),
        TemplateCopy(assets.runtime_components, layout.runtime_components_dir, recursive=True),
    ]


def _default_runner(cmd: Sequence[str], cwd: Path) -> Result[None, ProcessError]:
    return run_silent(cmd, cwd=cwd)


class ProvisionService:
    """Create and refresh the hidden workspace of one project."""

    def __init__(
        self,
        *,
        layout: WorkspaceLayout,
        assets: PackageAssets,
        console: ConsoleProtocol,
        tools: ToolsConfig | None = None,
        runner: Runner = _default_runner,
        dry_run: bool = False,
    ) -> None:
        self._layout = layout
        self._assets = assets
        self._console = console
        self._tools = tools or ToolsConfig()
        self._runner = runner
        self._dry_run = dry_run

    def provision(self) -> Result[None, ProvisionError]:
        """Ensure directories, refresh templates, compile the configuration."""
        for step in (self.ensure_directories, self.copy_templates, self.compile_config):
            result = step()
            if isinstance(result, Err):
                return result
        return Ok(None)

    def ensure_directories(self) -> Result[None, ProvisionError]:
        for directory in self._layout.directories():
            if self._dry_run:
                self._console.print(f"mkdir {directory}", Style.DIM)
                continue
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                return Err(
                    ProvisionError(
                        kind="io",
                        message=f"cannot create {directory}: {e.strerror or e}",
                        path=directory,
                    )
                )
        return Ok(None)

    def copy_templates(self) -> Result[None, ProvisionError]:
        for item in template_plan(self._layout, self._assets):
            if self._dry_run:
                self._console.print(f"copy {item.source} -> {item.target}", Style.DIM)
                continue
            try:
                if item.recursive:
                    replace_tree(item.source, item.target)
                else:
                    replace_file(item.source, item.target)
            except OSError as e:
                return Err(
                    ProvisionError(
                        kind="io",
                        message=f"cannot copy {item.source} to {item.target}: {e.strerror or e}",
                        path=item.target,
                        hint="reinstall vulx if its templates are missing",
                    )
                )
        return Ok(None)

    def compile_config(self) -> Result[None, ProvisionError]:
        source = self._layout.config_source_path
        if not source.is_file():
            return Err(
                ProvisionError(
                    kind="config_missing",
                    message=f"configuration source not found: {source}",
                    path=source,
                    hint=f"create {source.name} at the project root",
                )
            )

        cmd = typecheck_command(self._layout, self._tools)
        self._console.print(cmd.render(), Style.DIM)
        if self._dry_run:
            return Ok(None)

        def rejected(error: ProcessError) -> ProvisionError:
            return ProvisionError(
                kind="typecheck",
                message=f"{source.name} failed to compile: {error}",
                path=source,
                returncode=error.returncode,
            )

        return self._runner(cmd.argv, self._layout.root).map_err(rejected)


def provision(
    layout: WorkspaceLayout,
    assets: PackageAssets,
    *,
    console: ConsoleProtocol,
    tools: ToolsConfig | None = None,
    runner: Runner = _default_runner,
) -> Result[None, ProvisionError]:
    """Provision ``layout`` from ``assets``; see ``ProvisionService``."""
    service = ProvisionService(
        layout=layout,
        assets=assets,
        console=console,
        tools=tools,
        runner=runner,
    )
    return service.provision()
