"""
Sync — Reconcile a target asset tree with its source of truth.
"""

from .engine import plan_sync, run_sync
from .errors import (
    DeletionError,
    ManifestError,
    MissingRecordError,
    PathOutsideTreeError,
    RepositoryNotFoundError,
    StagingError,
    SyncError,
)
from .synchronizer import RepositoryGroup, sync_added, sync_modified, sync_removed

__all__ = [
    "run_sync",
    "plan_sync",
    "sync_added",
    "sync_modified",
    "sync_removed",
    "RepositoryGroup",
    "SyncError",
    "MissingRecordError",
    "RepositoryNotFoundError",
    "StagingError",
    "DeletionError",
    "ManifestError",
    "PathOutsideTreeError",
]
