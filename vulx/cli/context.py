from __future__ import annotations

import os
from dataclasses import dataclass

import typer

from vulx.core.config import Config, load_project_config
from vulx.core.errors import ErrorCode
from vulx.core.result import Err
from vulx.core.workspace import (
    PackageAssets,
    WorkspaceLayout,
    default_assets_dir,
    detect_project_root,
)
from vulx.output.console import ConsoleProtocol, RichConsole

DEV_TEMPLATES_ENV_VAR = "VULX_DEV"


@dataclass(frozen=True, slots=True)
class CLIContext:
    layout: WorkspaceLayout
    assets: PackageAssets
    config: Config
    console: ConsoleProtocol


def build_context() -> CLIContext:
    """Resolve root, configuration and assets once for this process."""
    console = RichConsole()

    root_result = detect_project_root()
    if isinstance(root_result, Err):
        console.error(root_result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    root = root_result.value

    config_result = load_project_config(root)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    dev = config.templates.dev or os.environ.get(DEV_TEMPLATES_ENV_VAR) == "1"

    return CLIContext(
        layout=WorkspaceLayout.from_config(root, config),
        assets=PackageAssets(root=default_assets_dir(), dev=dev),
        config=config,
        console=console,
    )
