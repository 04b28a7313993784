"""Utility functions for script-sync."""

import asyncio
import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.prompt import Confirm


def setup_logging(
    env: str,
    home_dir: Path,
    log_file: Optional[str] = None,
    log_level: str = "INFO",
) -> None:  # pragma: no cover
    """
    Configure logging for the application.

    Console output belongs to the rich console, so stderr only gets warnings.

    Args:
        env: The environment name (dev, test)
        home_dir: The root directory for the log file
        log_file: The name of the log file to write to
        log_level: The logging level to use for the file sink
    """
    # Remove default handler and any existing handlers
    logger.remove()

    # Add file handler if we are not running tests
    if log_file and env != "test":
        log_path = home_dir / log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path),
            level=log_level,
            rotation="100 MB",
            retention="10 days",
            backtrace=True,
            diagnose=True,
            enqueue=True,
            colorize=False,
        )

    logger.add(sys.stderr, level="WARNING", backtrace=True, diagnose=True)


def is_interactive() -> bool:
    """Check whether a user can answer prompts in this process."""
    if os.environ.get("CI"):
        return False
    return sys.stdin.isatty() and sys.stdout.isatty()


async def prompt_confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question on the terminal without blocking the event loop."""
    return await asyncio.to_thread(Confirm.ask, message, default=default)
