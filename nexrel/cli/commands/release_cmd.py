from __future__ import annotations

from pathlib import Path

import typer

from nexrel.cli.commands._helpers import value_or_exit
from nexrel.cli.context import build_context
from nexrel.core.config import select_target
from nexrel.core.result import Err
from nexrel.output.errors import (
    print_pipeline_failure,
    print_release_error,
    release_error_exit_code,
)
from nexrel.release.service import prepare_release, run_release


def _release(
    *,
    target: str | None,
    version: str | None,
    config: Path | None,
    dry_run: bool,
    debug: bool,
    verbose: bool,
) -> None:
    ctx = build_context(config_path=config, verbose=verbose or debug)
    console = ctx.console

    selected = value_or_exit(select_target(ctx.config, target), ctx)

    console.debug(f"Starting release of target {selected.name}")
    prepared = prepare_release(
        root=ctx.root,
        config=ctx.config,
        target=selected,
        explicit_version=version,
        debug=debug,
    )
    if isinstance(prepared, Err):
        print_release_error(prepared.error, console)
        console.error("Unable to process release.")
        raise typer.Exit(code=release_error_exit_code(prepared.error))

    outcome = run_release(prepared.value, console=console, dry_run=dry_run)
    if isinstance(outcome, Err):
        print_pipeline_failure(outcome.error, console)
        raise typer.Exit(code=release_error_exit_code(outcome.error.error))

    options = prepared.value.options
    if dry_run:
        console.info("dry run: nothing was executed")
    else:
        console.success(f"Released {options.artifact_id} {options.version}")


def release(
    target: str | None = typer.Argument(None, help="Config target to release"),
    version: str | None = typer.Option(
        None, "--version", help="Release version (default: package.json minus -SNAPSHOT)"
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to nexrel.toml"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the plan, run nothing"),
    debug: bool = typer.Option(False, "--debug", help="Pass -e -X to mvn and show details"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show commands being run"),
) -> None:
    """Tag, package and deploy a release, then start the next development version."""
    _release(
        target=target,
        version=version,
        config=config,
        dry_run=dry_run,
        debug=debug,
        verbose=verbose,
    )


def plan(
    target: str | None = typer.Argument(None, help="Config target to release"),
    version: str | None = typer.Option(None, "--version", help="Release version override"),
    config: Path | None = typer.Option(None, "--config", help="Path to nexrel.toml"),
) -> None:
    """Show the resolved options and release steps without running them."""
    _release(
        target=target,
        version=version,
        config=config,
        dry_run=True,
        debug=False,
        verbose=False,
    )
