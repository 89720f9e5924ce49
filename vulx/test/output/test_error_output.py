"""Tests for vulx.output.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from vulx.core.errors import ErrorCode
from vulx.output.console import MockConsole
from vulx.output.errors import exit_code_for, print_error
from vulx.services.errors import (
    BuildError,
    CleanError,
    CleanFailure,
    DispatchError,
    PortError,
    ProvisionError,
    UpgradeError,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (ProvisionError(kind="config_missing", message="m"), ErrorCode.USER_ERROR),
        (ProvisionError(kind="typecheck", message="m", returncode=2), ErrorCode.BUILD_ERROR),
        (ProvisionError(kind="io", message="m"), ErrorCode.IO_ERROR),
        (PortError(3000, "no free port"), ErrorCode.NETWORK_ERROR),
        (BuildError("prod", ("npx",), -9, "killed"), ErrorCode.BUILD_ERROR),
        (UpgradeError(("uv",), "failed"), ErrorCode.ENV_ERROR),
        (CleanError(failures=(CleanFailure(Path("x"), "denied"),)), ErrorCode.IO_ERROR),
    ],
)
def test_exit_codes(error: DispatchError, code: ErrorCode) -> None:
    assert exit_code_for(error) == int(code)


def test_build_error_propagates_tool_exit_status() -> None:
    assert exit_code_for(BuildError("hot", ("npx", "mix"), 42, "failed")) == 42


def test_print_provision_error_with_hint() -> None:
    console = MockConsole()

    print_error(
        ProvisionError(
            kind="config_missing",
            message="configuration source not found",
            hint="create it",
        ),
        console,
    )

    assert console.messages == ["error: configuration source not found", "hint: create it"]


def test_print_build_error() -> None:
    console = MockConsole()

    print_error(BuildError("serve", ("npx", "mix"), 1, "npx mix failed (exit 1)"), console)

    assert console.messages == ["error: serve build failed: npx mix failed (exit 1)"]


def test_print_clean_error_lists_every_failure() -> None:
    console = MockConsole()
    error = CleanError(
        failures=(
            CleanFailure(Path(".cache"), "Permission denied"),
            CleanFailure(Path("node_modules"), "no such directory"),
        )
    )

    print_error(error, console)

    assert console.messages == [
        "error: cannot remove .cache: Permission denied",
        "error: cannot remove node_modules: no such directory",
        "hint: use --force to ignore removal errors",
    ]
