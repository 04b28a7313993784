"""Command module for script-sync push operations."""

import asyncio
from typing import Optional

import typer
from loguru import logger
from rich.console import Console

from script_sync.cli.app import app
from script_sync.config import ProjectConfig
from script_sync.services.file_service import MirrorFileService, ProjectFileService
from script_sync.sync import ForceFlag, ManifestGate, SyncCycle, WatchController

console = Console()


def get_watch_controller(
    config: ProjectConfig,
    force: bool = False,
    watch: bool = False,
    file_service: Optional[ProjectFileService] = None,
    gate: Optional[ManifestGate] = None,
) -> WatchController:
    """Get a watch controller wired with all its collaborators."""
    file_service = file_service or MirrorFileService(config)
    gate = gate or ManifestGate(manifest_name=config.manifest_name)
    cycle = SyncCycle(
        file_service=file_service,
        gate=gate,
        force=ForceFlag(force),
        console=console,
    )
    return WatchController(file_service=file_service, cycle=cycle, console=console, watch=watch)


async def run_push(config: ProjectConfig, force: bool = False, watch: bool = False) -> None:
    """Run push operation."""
    controller = get_watch_controller(config, force=force, watch=watch)
    logger.debug(f"Pushing {config.home} to {config.remote_root} (force={force}, watch={watch})")
    await controller.start()


@app.command()
def push(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Forcibly overwrites the remote manifest.",
    ),
    watch: bool = typer.Option(
        False,
        "--watch",
        "-w",
        help="Watches for local file changes. Pushes when a non-ignored file changes.",
    ),
) -> None:
    """Update the remote project."""
    try:
        asyncio.run(run_push(ctx.obj, force=force, watch=watch))

    except KeyboardInterrupt:
        logger.info("Push interrupted")
    except Exception as e:
        if not isinstance(e, typer.Exit):
            logger.exception("Push failed")
            typer.echo(f"Error during push: {e}", err=True)
            raise typer.Exit(1)
        raise
