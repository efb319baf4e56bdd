"""
Git Collaborators — Repository resolution and staging.

Uses git via subprocess, one blocking call at a time. Only local working
copies are touched; nothing here talks to a remote.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Sequence

from .errors import RepositoryNotFoundError, StagingError

logger = logging.getLogger(__name__)

# Keeps a single `git add` argument list well under OS limits
DEFAULT_BATCH_SIZE = 100
DEFAULT_GIT_TIMEOUT = 60


def _git(repo: Path, *args: str, timeout: int = DEFAULT_GIT_TIMEOUT) -> subprocess.CompletedProcess:
    """Run a git command in the repo directory."""
    cmd = ["git"] + list(args)
    return subprocess.run(
        cmd,
        cwd=str(repo),
        capture_output=True,
        text=True,
        timeout=timeout,
    )


def find_repo_root(location: Path) -> Path:
    """
    Return the root of the git repository containing a location.

    Walks the location and its ancestors and returns the first directory
    holding a `.git` entry. `.git` may be a file (worktrees, submodules).
    The location itself does not need to exist yet.
    """
    location = Path(location).absolute()
    for candidate in (location, *location.parents):
        if (candidate / ".git").exists():
            return candidate
    raise RepositoryNotFoundError(location)


def _batches(paths: Sequence[str], size: int) -> List[List[str]]:
    return [list(paths[i:i + size]) for i in range(0, len(paths), size)]


def stage_files(
    paths: Sequence[str],
    repo: Path,
    batch_size: int = DEFAULT_BATCH_SIZE,
    timeout: int = DEFAULT_GIT_TIMEOUT,
) -> None:
    """
    Mark paths as added in the repository's index.

    Paths are relative to the repository root. Runs one `git add` per
    batch of at most batch_size paths. Raises StagingError on the first
    batch git rejects.
    """
    if not paths:
        return
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    for batch in _batches(paths, batch_size):
        result = _git(repo, "add", "--ignore-errors", "--", *batch, timeout=timeout)
        if result.returncode != 0:
            error = result.stderr.strip() or result.stdout.strip()
            logger.error(
                f"[sync-git] git add failed in {repo}: {error}", extra={"repo": str(repo)}
            )
            raise StagingError(repo, error)

    logger.info(f"[sync-git] Staged {len(paths)} file(s) in {repo}", extra={"repo": str(repo)})
