"""Clean command - remove the workspace cache and installed dependencies."""

from __future__ import annotations

import typer

from vulx.cli.commands._helpers import run_verb
from vulx.cli.context import build_context
from vulx.services.dispatch import Verb


def clean(
    force: bool = typer.Option(False, "--force", "-f", help="Ignore removal errors"),
    dry_run: bool = typer.Option(False, "--dry-run", help="List directories without removing"),
) -> None:
    """Delete the hidden workspace and node_modules."""
    run_verb(build_context(), Verb.CLEAN, dry_run=dry_run, force=force)
