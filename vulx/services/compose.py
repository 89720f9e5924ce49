"""Mode-to-command composition.

Pure functions: the same mode, port and layout always produce the same
tokens, in the same order. Nothing here touches the filesystem or the
network.

    HOT    npx mix watch --mix-config=<cfg> --hot -- --port=<port>
    PROD   npx mix --mix-config=<cfg> --production
    SERVE  <PROD> && npx http-server -p <port> -a <host> <dist> --gzip
                     --proxy http://<host>:<port>?
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import StrEnum

from vulx.core.config import ToolsConfig
from vulx.core.workspace import WorkspaceLayout

__all__ = [
    "CommandLine",
    "ComposedCommand",
    "Mode",
    "compose",
    "typecheck_command",
    "upgrade_command",
]


class Mode(StrEnum):
    HOT = "hot"
    PROD = "prod"
    SERVE = "serve"

    @property
    def needs_port(self) -> bool:
        return self in (Mode.HOT, Mode.SERVE)


@dataclass(frozen=True, slots=True)
class CommandLine:
    """One external invocation: a program and its arguments."""

    program: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def render(self) -> str:
        """Shell-quoted form, for display."""
        return shlex.join(self.argv)


@dataclass(frozen=True, slots=True)
class ComposedCommand:
    """Steps of one mode, chained: each step runs only if the previous succeeded."""

    mode: Mode
    steps: tuple[CommandLine, ...]

    def render(self) -> str:
        return " && ".join(step.render() for step in self.steps)

    def tokens(self) -> list[str]:
        """Flat token list of every step, for inspection."""
        return [token for step in self.steps for token in step.argv]


def _build_step(
    mode: Mode,
    port: int | None,
    layout: WorkspaceLayout,
    tools: ToolsConfig,
) -> CommandLine:
    config_flag = f"--mix-config={layout.mix_config_path}"
    if mode is Mode.HOT:
        args = ("mix", "watch", config_flag, "--hot", "--", f"--port={port}")
    else:
        args = ("mix", config_flag, "--production")
    return CommandLine(tools.runner, args)


def _serve_step(port: int, host: str, layout: WorkspaceLayout, tools: ToolsConfig) -> CommandLine:
    return CommandLine(
        tools.runner,
        (
            "http-server",
            "-p",
            str(port),
            "-a",
            host,
            str(layout.dist_dir),
            "--gzip",
            "--proxy",
            f"http://{host}:{port}?",
        ),
    )


def compose(
    mode: Mode,
    port: int | None,
    layout: WorkspaceLayout,
    tools: ToolsConfig | None = None,
    *,
    host: str = "localhost",
) -> ComposedCommand:
    """Build the command line(s) for ``mode``.

    Raises:
        ValueError: ``mode`` needs a port and none was given.
    """
    tools = tools or ToolsConfig()
    if mode.needs_port and port is None:
        raise ValueError(f"mode {mode} requires a resolved port")

    steps = [_build_step(mode, port, layout, tools)]
    if mode is Mode.SERVE and port is not None:
        steps.append(_serve_step(port, host, layout, tools))
    return ComposedCommand(mode=mode, steps=tuple(steps))


def typecheck_command(layout: WorkspaceLayout, tools: ToolsConfig | None = None) -> CommandLine:
    """Compile the user's configuration source into the workspace."""
    tools = tools or ToolsConfig()
    return CommandLine(
        tools.runner,
        (
            "tsc",
            str(layout.config_source_path),
            "--outDir",
            str(layout.cache_dir),
            "--moduleResolution",
            "node",
            "--skipLibCheck",
        ),
    )


def upgrade_command(tools: ToolsConfig | None = None) -> CommandLine:
    """Reinstall vulx from its latest preview (pre-release) build."""
    tools = tools or ToolsConfig()
    return CommandLine(
        "uv",
        ("tool", "install", "--reinstall", "--prerelease", "allow", tools.package),
    )
