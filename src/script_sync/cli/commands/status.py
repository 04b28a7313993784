"""Status command for script-sync CLI."""

import asyncio
from pathlib import PurePath
from typing import List

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.tree import Tree

from script_sync.cli.app import app
from script_sync.config import ProjectConfig
from script_sync.models import ChangedFile
from script_sync.services.file_service import MirrorFileService

# Create rich console
console = Console()


def display_changes(changes: List[ChangedFile], manifest_name: str):
    """Display pending changes as a tree, flagging the manifest."""
    if not changes:
        console.print("Script is already up to date.")
        return

    tree = Tree(f"[bold]{len(changes)} files to push[/bold]")
    for change in changes:
        if PurePath(change.local_path).name == manifest_name:
            tree.add(f"[yellow]{change.local_path}[/yellow] (manifest, needs --force or confirmation)")
        else:
            tree.add(f"[green]{change.local_path}[/green]")
    console.print(Panel(tree, expand=False))


async def run_status(config: ProjectConfig):
    """Check for files that differ from the remote store."""
    file_service = MirrorFileService(config)
    changes = await file_service.list_changed_files()
    display_changes(changes, config.manifest_name)


@app.command()
def status(ctx: typer.Context) -> None:
    """Show files that would be pushed."""
    try:
        asyncio.run(run_status(ctx.obj))
    except Exception as e:
        logger.exception(f"Error checking status: {e}")
        typer.echo(f"Error checking status: {e}", err=True)
        raise typer.Exit(code=1)
