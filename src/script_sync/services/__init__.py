"""Services package."""

from .file_service import MirrorFileService, ProjectFileService, WatchSubscription

__all__ = [
    "MirrorFileService",
    "ProjectFileService",
    "WatchSubscription",
]
