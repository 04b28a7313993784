class SyncError(Exception):
    """Base class for script-sync errors"""

    pass


class PushError(SyncError):
    """Raised when pushing files to the remote store fails"""

    pass


class WatchError(SyncError):
    """Raised when the local file watcher fails"""

    pass


class ProjectConfigError(SyncError):
    """Raised when the project configuration is unusable"""

    pass
