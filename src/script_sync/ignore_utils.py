"""Utilities for handling .claspignore patterns and deciding which files get pushed."""

import fnmatch
from pathlib import Path
from typing import Iterable, Set

from loguru import logger

from script_sync.config import STATE_DIR_NAME

# Never pushed, whatever the ignore file says
DEFAULT_IGNORE_PATTERNS = {
    STATE_DIR_NAME,
    ".git",
    "node_modules",
    ".venv",
    "__pycache__",
    ".DS_Store",
    ".idea",
    ".vscode",
    ".clasp.json",
    ".env",
}


def load_ignore_patterns(base_path: Path, ignore_file: str) -> Set[str]:
    """Load patterns from the project's ignore file and add the defaults.

    Args:
        base_path: The project root holding the ignore file
        ignore_file: File name of the ignore file, e.g. ".claspignore"

    Returns:
        Set of patterns to ignore
    """
    patterns = set(DEFAULT_IGNORE_PATTERNS)

    path = base_path / ignore_file
    if not path.exists():
        return patterns

    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        # Skip empty lines and comments
        if line and not line.startswith("#"):
            patterns.add(line)

    logger.debug(f"Loaded {len(patterns)} ignore patterns from {path}")
    return patterns


def should_ignore_path(relative_path: Path, ignore_patterns: Iterable[str]) -> bool:
    """Check a project-relative path against ignore patterns.

    Supports root-anchored patterns ("/build"), directory patterns ("dist/"),
    bare names matched against any path component, and fnmatch globs.
    """
    posix = relative_path.as_posix()
    parts = relative_path.parts

    for pattern in ignore_patterns:
        if pattern.startswith("/"):
            anchored = pattern[1:].rstrip("/")
            if fnmatch.fnmatch(posix, anchored) or (parts and parts[0] == anchored):
                return True
            continue

        if pattern.endswith("/"):
            if pattern[:-1] in parts[:-1]:
                return True
            continue

        if pattern in parts:
            return True

        if fnmatch.fnmatch(posix, pattern) or fnmatch.fnmatch(relative_path.name, pattern):
            return True

    return False


def is_pushable(relative_path: Path, extensions: Iterable[str], ignore_patterns: Set[str]) -> bool:
    """True if a project file has a pushable suffix and is not ignored."""
    if relative_path.suffix not in set(extensions):
        return False
    return not should_ignore_path(relative_path, ignore_patterns)
