"""Build commands - prepare the workspace and delegate to the bundler."""

from __future__ import annotations

import typer

from vulx.cli.commands._helpers import run_verb
from vulx.cli.context import build_context
from vulx.services.dispatch import Verb

_DRY_RUN = typer.Option(False, "--dry-run", help="Print commands without executing")


def prepare(dry_run: bool = _DRY_RUN) -> None:
    """Provision the workspace and compile vulmix.config.ts."""
    run_verb(build_context(), Verb.PREPARE, dry_run=dry_run)


def dev(dry_run: bool = _DRY_RUN) -> None:
    """Provision, then watch with hot reload on a free port."""
    run_verb(build_context(), Verb.DEV, dry_run=dry_run)


def prod(dry_run: bool = _DRY_RUN) -> None:
    """Provision, then run an optimized production build."""
    run_verb(build_context(), Verb.PROD, dry_run=dry_run)


def serve(dry_run: bool = _DRY_RUN) -> None:
    """Build for production and serve the output on a free port."""
    run_verb(build_context(), Verb.SERVE, dry_run=dry_run)
