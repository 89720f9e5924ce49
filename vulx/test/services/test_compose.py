"""Tests for vulx.services.compose module."""

from __future__ import annotations

from pathlib import Path

import pytest

from vulx.core.config import ToolsConfig
from vulx.core.workspace import WorkspaceLayout
from vulx.services.compose import (
    CommandLine,
    Mode,
    compose,
    typecheck_command,
    upgrade_command,
)

ROOT = Path("/project")
LAYOUT = WorkspaceLayout(root=ROOT)
MIX_CONFIG = "--mix-config=/project/.cache/bundler-config/webpack.mix.js"


class TestMode:
    def test_needs_port(self) -> None:
        assert Mode.HOT.needs_port
        assert Mode.SERVE.needs_port
        assert not Mode.PROD.needs_port


class TestCompose:
    def test_hot(self) -> None:
        command = compose(Mode.HOT, 3001, LAYOUT)

        assert [s.argv for s in command.steps] == [
            ["npx", "mix", "watch", MIX_CONFIG, "--hot", "--", "--port=3001"],
        ]

    def test_prod(self) -> None:
        command = compose(Mode.PROD, None, LAYOUT)

        assert [s.argv for s in command.steps] == [
            ["npx", "mix", MIX_CONFIG, "--production"],
        ]

    def test_serve_chains_static_server(self) -> None:
        command = compose(Mode.SERVE, 3000, LAYOUT)

        assert [s.argv for s in command.steps] == [
            ["npx", "mix", MIX_CONFIG, "--production"],
            [
                "npx",
                "http-server",
                "-p",
                "3000",
                "-a",
                "localhost",
                "/project/_dist",
                "--gzip",
                "--proxy",
                "http://localhost:3000?",
            ],
        ]

    @pytest.mark.parametrize("mode", list(Mode))
    def test_deterministic(self, mode: Mode) -> None:
        assert compose(mode, 3000, LAYOUT) == compose(mode, 3000, LAYOUT)

    @pytest.mark.parametrize("mode", list(Mode))
    def test_always_uses_provisioned_mix_config(self, mode: Mode) -> None:
        command = compose(mode, 3000, LAYOUT)

        assert MIX_CONFIG in command.steps[0].args

    def test_watch_and_hot_only_in_hot_mode(self) -> None:
        hot = compose(Mode.HOT, 4000, LAYOUT).tokens()
        assert "watch" in hot
        assert "--hot" in hot
        assert "--port=4000" in hot
        assert "--production" not in hot

        for mode in (Mode.PROD, Mode.SERVE):
            tokens = compose(mode, 4000, LAYOUT).tokens()
            assert "--production" in tokens
            assert "watch" not in tokens
            assert "--hot" not in tokens

    def test_only_serve_has_a_second_step(self) -> None:
        assert len(compose(Mode.HOT, 3000, LAYOUT).steps) == 1
        assert len(compose(Mode.PROD, None, LAYOUT).steps) == 1
        assert len(compose(Mode.SERVE, 3000, LAYOUT).steps) == 2

    @pytest.mark.parametrize("mode", [Mode.HOT, Mode.SERVE])
    def test_port_required(self, mode: Mode) -> None:
        with pytest.raises(ValueError, match="requires a resolved port"):
            compose(mode, None, LAYOUT)

    def test_custom_runner_and_host(self) -> None:
        command = compose(Mode.SERVE, 5000, LAYOUT, ToolsConfig(runner="bunx"), host="0.0.0.0")

        assert all(step.program == "bunx" for step in command.steps)
        assert "http://0.0.0.0:5000?" in command.steps[1].args

    def test_render_chains_with_and(self) -> None:
        rendered = compose(Mode.SERVE, 3000, LAYOUT).render()

        assert " && npx http-server -p 3000" in rendered
        assert "'http://localhost:3000?'" in rendered


class TestCommandLine:
    def test_render_quotes_unsafe_paths(self) -> None:
        line = CommandLine("npx", ("tsc", "/my project/vulmix.config.ts"))
        assert line.render() == "npx tsc '/my project/vulmix.config.ts'"


def test_typecheck_command() -> None:
    assert typecheck_command(LAYOUT).argv == [
        "npx",
        "tsc",
        "/project/vulmix.config.ts",
        "--outDir",
        "/project/.cache",
        "--moduleResolution",
        "node",
        "--skipLibCheck",
    ]


def test_upgrade_command_targets_prerelease_channel() -> None:
    assert upgrade_command().argv == [
        "uv",
        "tool",
        "install",
        "--reinstall",
        "--prerelease",
        "allow",
        "vulx",
    ]
