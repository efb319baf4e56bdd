"""
Asset Locators — Lookups from asset path to physical record.

A locator maps each relative asset path in one tree to the repository
that owns it and the file's location on disk.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Optional

from ..models.asset import AssetLocator, AssetRecord
from .errors import MissingRecordError, RepositoryNotFoundError
from .vcs import find_repo_root

logger = logging.getLogger(__name__)

RepoResolver = Callable[[Path], Path]


def lookup(locator: AssetLocator, path: str, tree: str = "source") -> AssetRecord:
    """Fetch the record for path, or raise MissingRecordError."""
    record = locator.get(path)
    if record is None:
        raise MissingRecordError(path, tree)
    return record


def _matches(rel_path: str, patterns: Optional[Iterable[str]]) -> bool:
    if not patterns:
        return True
    name = rel_path.rsplit("/", 1)[-1]
    return any(
        fnmatch.fnmatch(rel_path, p) or fnmatch.fnmatch(name, p) for p in patterns
    )


def build_locator(
    root: Path,
    repo_resolver: RepoResolver = find_repo_root,
    patterns: Optional[Iterable[str]] = None,
) -> AssetLocator:
    """
    Walk a tree and map each tracked file to its AssetRecord.

    `.git` directories are skipped. When patterns are given (fnmatch
    globs, matched against the relative path or the file name), only
    matching files are included. A missing root yields an empty locator.
    """
    root = Path(root).absolute()
    locator: AssetLocator = {}
    if not root.is_dir():
        logger.warning(f"[sync-locate] {root} is not a directory")
        return locator

    patterns = list(patterns) if patterns else None
    # Files in one directory share a repository
    repo_cache = {}

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d != ".git")
        current = Path(dirpath)
        for filename in sorted(filenames):
            if filename == ".git":
                continue
            file = current / filename
            rel_path = file.relative_to(root).as_posix()
            if not _matches(rel_path, patterns):
                continue
            if current not in repo_cache:
                repo_cache[current] = repo_resolver(file)
            locator[rel_path] = AssetRecord(repo=repo_cache[current], file=file)

    logger.debug(f"[sync-locate] {len(locator)} asset(s) under {root}")
    return locator


def resolver_with_default(default: Path, resolver: RepoResolver = find_repo_root) -> RepoResolver:
    """
    Wrap a resolver so locations outside any repository map to default.

    Used for source trees, which need not be version controlled.
    """
    default = Path(default).absolute()

    def resolve(location: Path) -> Path:
        try:
            return resolver(location)
        except RepositoryNotFoundError:
            return default

    return resolve
