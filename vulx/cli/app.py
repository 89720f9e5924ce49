from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from pathlib import Path

import typer

from vulx import __version__
from vulx.cli.commands.build import dev, prepare, prod, serve
from vulx.cli.commands.clean import clean
from vulx.cli.commands.upgrade import upgrade
from vulx.core.errors import ErrorCode
from vulx.core.workspace import ROOT_ENV_VAR
from vulx.output.console import RichConsole, Style
from vulx.services.dispatch import Verb, parse_verb, usage_text


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
    help="Prepare a Vulmix workspace and run the bundler.",
)


# Commands
app.command()(prepare)
app.command()(dev)
app.command()(prod)
app.command()(serve)
app.command()(upgrade)
app.command()(clean)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root (overrides VULX_ROOT and the current directory)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if root is not None:
        resolved = root.expanduser().resolve()
        if not resolved.is_dir():
            typer.echo(f"error: --root '{resolved}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        os.environ[ROOT_ENV_VAR] = str(resolved)


def _first_command(args: Sequence[str]) -> str | None:
    """First token that is not a global option (``--root`` consumes a value)."""
    skip = False
    for arg in args:
        if skip:
            skip = False
            continue
        if arg == "--root":
            skip = True
            continue
        if arg.startswith("-"):
            continue
        return arg
    return None


def main(argv: Sequence[str] | None = None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)

    # Unknown verbs are informational, not usage errors.
    informational = {"--help", "-h", "--version"}
    if not informational.intersection(args) and parse_verb(_first_command(args)) is Verb.UNKNOWN:
        RichConsole().print(usage_text(), Style.WARNING)
        return

    app(args=args, prog_name="vulx")
