"""CLI commands for script-sync."""

from . import push, status

__all__ = ["push", "status"]
