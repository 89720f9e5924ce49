"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from vulx import __version__
from vulx.core.result import Err, Result
from vulx.output.errors import exit_code_for, print_error
from vulx.services.dispatch import Dispatcher, Verb
from vulx.services.errors import DispatchError

if TYPE_CHECKING:
    from vulx.cli.context import CLIContext


def make_dispatcher(ctx: CLIContext, *, dry_run: bool = False, force: bool = False) -> Dispatcher:
    return Dispatcher(
        layout=ctx.layout,
        assets=ctx.assets,
        config=ctx.config,
        console=ctx.console,
        version=__version__,
        dry_run=dry_run,
        force=force,
    )


def exit_on_error(result: Result[None, DispatchError], ctx: CLIContext) -> None:
    """Print the error and exit non-zero if result is Err, otherwise return."""
    if isinstance(result, Err):
        print_error(result.error, ctx.console)
        raise typer.Exit(code=exit_code_for(result.error))


def run_verb(ctx: CLIContext, verb: Verb, *, dry_run: bool = False, force: bool = False) -> None:
    dispatcher = make_dispatcher(ctx, dry_run=dry_run, force=force)
    exit_on_error(dispatcher.dispatch(verb), ctx)
