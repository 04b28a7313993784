from pathlib import Path
from typing import Optional

import typer

from script_sync.config import get_project_config
from script_sync.services.exceptions import ProjectConfigError
from script_sync.utils import setup_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import script_sync

        typer.echo(f"script-sync version: {script_sync.__version__}")
        raise typer.Exit()


app = typer.Typer(name="script-sync")


@app.callback()
def app_callback(
    ctx: typer.Context,
    project: Optional[Path] = typer.Option(
        None,
        "--project",
        "-p",
        help="Root directory of the script project (defaults to the current directory)",
        envvar="SCRIPT_SYNC_HOME",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """script-sync - push a local script project to its remote store."""
    if ctx.invoked_subcommand is None:
        return

    try:
        config = get_project_config(project)
    except ProjectConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    setup_logging(
        env=config.env,
        home_dir=config.state_dir,
        log_file="script-sync.log",
        log_level=config.log_level,
    )
    ctx.obj = config
