"""Typer-based CLI for asset preparation."""

import logging
from pathlib import Path

import typer
from rich.logging import RichHandler

from assetprep.config import Settings
from assetprep.manifest import load_remote_listing
from assetprep.orchestrators import Preparation
from assetprep.ui import Reporter
from assetprep.ui.tables import create_action_table, create_file_table

app = typer.Typer(help="Prepare static asset trees for deployment")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Show help when no subcommand is provided."""
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _build_settings(**overrides) -> Settings:
    """Load settings from the environment, applying CLI overrides that were given."""
    return Settings(**{key: value for key, value in overrides.items() if value is not None})


@app.command()
def scan(
    source: Path = typer.Argument(..., help="Directory holding the assets"),
    include_hidden: bool = typer.Option(False, "--include-hidden", help="Include dot-files"),
    workers: int = typer.Option(None, "--workers", "-w", help="Concurrent hash workers"),
):
    """Discover files and show their metadata."""
    reporter = Reporter()
    try:
        config = _build_settings(include_hidden=include_hidden or None, max_hash_workers=workers)
        files = Preparation(config).scan(source, reporter)
    except (OSError, ValueError) as e:
        reporter.report_error(str(e))
        raise typer.Exit(1)

    if not files:
        reporter.console.print("[dim]No files found[/dim]")
        return

    reporter.console.print(create_file_table(files))


@app.command()
def prepare(
    source: Path = typer.Argument(..., help="Directory holding the assets"),
    strategy: list[str] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="Strategy to apply: clone, gzip or gzip-suffix (repeatable)",
    ),
    remote: Path = typer.Option(None, "--remote", "-r", help="JSON listing of remote objects"),
    manifest: Path = typer.Option(None, "--manifest", "-m", help="Write planned actions here"),
    delete: bool = typer.Option(False, "--delete", help="Delete remote objects with no local file"),
    include_hidden: bool = typer.Option(False, "--include-hidden", help="Include dot-files"),
    workers: int = typer.Option(None, "--workers", "-w", help="Concurrent hash workers"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors"),
):
    """Prepare files and plan upload, header and delete actions."""
    reporter = Reporter(silent=quiet)
    try:
        config = _build_settings(
            strategies=strategy or None,
            delete_orphans=delete or None,
            include_hidden=include_hidden or None,
            max_hash_workers=workers,
        )
        remote_objects = load_remote_listing(remote) if remote else {}
        plan = Preparation(config).prepare(
            source,
            remote=remote_objects,
            reporter=reporter,
            manifest_path=manifest,
        )
    except (OSError, ValueError) as e:
        # Errors are printed even when quiet
        Reporter().report_error(str(e))
        raise typer.Exit(1)

    if plan.actions and not quiet:
        reporter.console.print(create_action_table(plan.actions))


if __name__ == "__main__":
    app()
