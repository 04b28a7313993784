"""script-sync - push a local script project to its remote store."""

__version__ = "0.1.0"
