"""Main CLI entry point for script-sync."""  # pragma: no cover

from script_sync.cli.app import app  # pragma: no cover

# Register commands
from script_sync.cli.commands import push, status  # pragma: no cover

__all__ = ["app", "push", "status"]  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
