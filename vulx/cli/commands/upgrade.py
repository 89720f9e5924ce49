from __future__ import annotations

import typer

from vulx.cli.commands._helpers import run_verb
from vulx.cli.context import build_context
from vulx.services.dispatch import Verb


def upgrade(
    dry_run: bool = typer.Option(False, "--dry-run", help="Print commands without executing"),
) -> None:
    """Reinstall vulx at its latest preview release (via `uv tool`)."""
    run_verb(build_context(), Verb.UPGRADE, dry_run=dry_run)
