"""Clean task.

Deletes the relocated build output root. The task is idempotent: a
missing root is a no-op, so running it twice in a row is safe.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from buildconf.errors import CleanError
from buildconf.types import TaskKind

logger = logging.getLogger(__name__)

CLEAN_TASK_NAME = "clean"


@dataclass
class CleanResult:
    """Result of a clean run."""

    path: Path
    removed: bool
    size_bytes: int = 0


def get_tree_size(path: Path) -> int:
    """Calculate total size of the files under a directory.

    Args:
        path: Root directory.

    Returns:
        Total size in bytes (0 if the directory does not exist).
    """
    total = 0
    if path.exists():
        for child in path.rglob("*"):
            if child.is_file() and not child.is_symlink():
                total += child.stat().st_size
    return total


def _is_missing(path: Path) -> bool:
    return not path.exists() and not path.is_symlink()


def _root_vanished(path: Path, error: FileNotFoundError) -> bool:
    return (
        error.filename is not None
        and Path(error.filename) == path
        and _is_missing(path)
    )


def delete_tree(path: Path) -> CleanResult:
    """Recursively delete a directory tree.

    A symlink in place of the tree is unlinked without touching its target.

    Args:
        path: Directory to delete.

    Returns:
        CleanResult; ``removed`` is False if nothing existed.

    Raises:
        CleanError: If the path is not a directory or symlink, or the tree
            exists but cannot be deleted.
    """
    if _is_missing(path):
        logger.debug("Nothing to clean at %s", path)
        return CleanResult(path=path, removed=False)
    if not path.is_symlink() and not path.is_dir():
        raise CleanError(
            f"Refusing to delete {path}: not a directory",
            details={"path": str(path)},
        )

    logger.info("Deleting build output at %s", path)

    size_bytes = 0
    try:
        if path.is_symlink():
            path.unlink()
        else:
            size_bytes = get_tree_size(path)
            shutil.rmtree(path)
    except OSError as e:
        # Only the root itself vanishing counts as nothing to delete
        if isinstance(e, FileNotFoundError) and _root_vanished(path, e):
            logger.debug("Build output at %s vanished before deletion", path)
            return CleanResult(path=path, removed=False)
        logger.error("Failed to delete %s: %s", path, e)
        raise CleanError(
            f"Cannot delete {path}: {e.strerror or e}",
            details={"path": str(path), "errno": e.errno},
        ) from e

    return CleanResult(path=path, removed=True, size_bytes=size_bytes)


@dataclass(frozen=True)
class CleanTask:
    """Root task deleting the whole build output tree."""

    target: Path

    kind = TaskKind.DELETE
    name = CLEAN_TASK_NAME
    project = None

    @property
    def path(self) -> str:
        return f":{self.name}"

    @property
    def description(self) -> str:
        return f"Deletes the build directory {self.target}"

    def run(self) -> CleanResult:
        """Delete the target tree."""
        return delete_tree(self.target)


__all__ = ["CLEAN_TASK_NAME", "CleanResult", "CleanTask", "delete_tree", "get_tree_size"]
