"""Types and utilities for pushing files."""

from dataclasses import dataclass


@dataclass
class ForceFlag:
    """Whether a manifest overwrite is pre-authorized for this session.

    Only ever moves from False to True.
    """

    value: bool = False

    def upgrade(self) -> None:
        self.value = True


def format_push_summary(count: int) -> str:
    """Summary line for a push of `count` files."""
    if count == 0:
        return "Pushed no files."
    if count == 1:
        return "Pushed one file."
    return f"Pushed {count} files."
