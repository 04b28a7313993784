"""Data types passed between the file service and the push controller."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChangedFile:
    """A local file whose content differs from the remote store."""

    local_path: str


@dataclass(frozen=True)
class PushedFile:
    """A file written to the remote store by a push.

    Attributes:
        local_path: Path of the source file, relative to the project root
        remote_path: Where the file ended up in the remote store
    """

    local_path: str
    remote_path: str
