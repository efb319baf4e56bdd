"""
Sync Errors — Named failures raised by the sync passes and collaborators.

All of these are caught per item by the failure isolator; none of them
aborts a run on its own.
"""

from __future__ import annotations

from pathlib import Path


class SyncError(Exception):
    """Base class for asset sync failures."""


class MissingRecordError(SyncError):
    """An asset path from a change set has no entry in the expected locator."""

    def __init__(self, path: str, tree: str):
        self.path = path
        self.tree = tree
        super().__init__(f"{path} not found in {tree} tree")


class RepositoryNotFoundError(SyncError):
    """No enclosing git repository for a file location."""

    def __init__(self, location: Path):
        self.location = location
        super().__init__(f"No git repository contains {location}")


class StagingError(SyncError):
    """git add returned a non-zero exit code."""

    def __init__(self, repo: Path, stderr: str):
        self.repo = repo
        self.stderr = stderr
        super().__init__(f"Failed to stage files in {repo}: {stderr or 'unknown error'}")


class ManifestError(SyncError):
    """A change manifest could not be read or has the wrong shape."""


class DeletionError(SyncError):
    """A target file could not be deleted."""

    def __init__(self, location: Path, reason: str):
        self.location = location
        super().__init__(f"Failed to delete {location}: {reason}")


class PathOutsideTreeError(SyncError):
    """An asset path resolves outside the tree it is joined to."""

    def __init__(self, path: str, root: Path):
        self.path = path
        self.root = root
        super().__init__(f"{path} resolves outside {root}")
