from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from vulx import __version__
from vulx.cli.app import _first_command, app, main  # pyright: ignore[reportPrivateUsage]
from vulx.core.workspace import ROOT_ENV_VAR
from vulx.services.dispatch import usage_text


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        ([], None),
        (["dev"], "dev"),
        (["--root", "/tmp/project", "serve"], "serve"),
        (["--root", "/tmp/project"], None),
        (["clean", "--force"], "clean"),
        (["--verbose", "bogus"], "bogus"),
    ],
)
def test_first_command(args: list[str], expected: str | None) -> None:
    assert _first_command(args) == expected


@pytest.mark.parametrize("args", [["bogus"], [], ["BUILD", "--force"]])
def test_unknown_verb_prints_usage_and_exits_cleanly(
    args: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    main(args)

    assert usage_text() in capsys.readouterr().out


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--version"])

    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_clean_dry_run_through_app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path))
    (tmp_path / ".cache").mkdir()

    result = CliRunner().invoke(app, ["clean", "--dry-run"])

    assert result.exit_code == 0
    assert "rm -r" in result.output
    assert (tmp_path / ".cache").is_dir()


def test_root_option_must_be_a_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path))

    result = CliRunner().invoke(app, ["--root", str(tmp_path / "missing"), "prepare"])

    assert result.exit_code == 1
