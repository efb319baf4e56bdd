"""
Synchronizers — The three passes that bring a target tree in line.

- sync_added: copy new files in, then stage them, one git call per repo
- sync_modified: overwrite tracked files in place
- sync_removed: delete files and prune a parent left empty

Each pass is a single sequential sweep over its change set with every
item isolated: a missing record or an I/O error is logged and recorded,
and the sweep moves on. Passes share nothing but the locators passed in.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..models.asset import AssetLocator
from ..reliability.isolation import FailureIsolator
from .errors import DeletionError, PathOutsideTreeError
from .locator import RepoResolver, lookup
from .vcs import find_repo_root, stage_files

logger = logging.getLogger(__name__)

Stager = Callable[[Sequence[str], Path], None]


@dataclass
class RepositoryGroup:
    """Newly added paths per repository, in insertion order."""

    paths: Dict[Path, List[str]] = field(default_factory=dict)

    def add(self, repo: Path, rel_path: str) -> None:
        self.paths.setdefault(repo, []).append(rel_path)

    def items(self) -> Iterator[Tuple[Path, List[str]]]:
        return iter(self.paths.items())

    def __len__(self) -> int:
        return sum(len(p) for p in self.paths.values())

    def __bool__(self) -> bool:
        return bool(self.paths)


def _inside(root: Path, path: str) -> Path:
    target = root / path
    if root.resolve() not in target.resolve().parents:
        raise PathOutsideTreeError(path, root)
    return target


def _copy_bytes(source: Path, target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)


def sync_added(
    added: Iterable[str],
    source_locator: AssetLocator,
    target_dir: Path,
    repo_resolver: RepoResolver = find_repo_root,
    stager: Stager = stage_files,
    isolator: Optional[FailureIsolator] = None,
) -> RepositoryGroup:
    """
    Copy added assets into the target tree and stage them.

    A file already at the destination is reported and overwritten.
    Returns the repository group; a repository whose staging call
    failed is recorded by the isolator under the "stage" operation.
    """
    isolator = isolator or FailureIsolator(logger)
    target_dir = Path(target_dir)
    group = RepositoryGroup()

    def add_one(path: str) -> None:
        target = _inside(target_dir, path)
        if target.exists():
            isolator.warn(f"{path} already exists in target repo!")
        source = lookup(source_locator, path, "source")
        _copy_bytes(source.file, target)
        repo = Path(repo_resolver(target))
        group.add(repo, target.absolute().relative_to(repo.absolute()).as_posix())

    for path in added:
        isolator.call("added", path, add_one, path)

    for repo, paths in group.items():
        logger.info(
            f"[sync-add] Staging {len(paths)} new file(s) in {repo}", extra={"repo": str(repo)}
        )
        isolator.call("stage", str(repo), stager, list(paths), repo)

    return group


def sync_modified(
    modified: Iterable[str],
    target_locator: AssetLocator,
    source_locator: AssetLocator,
    isolator: Optional[FailureIsolator] = None,
) -> int:
    """Overwrite each modified target file with its source. Returns files synced."""
    isolator = isolator or FailureIsolator(logger)

    def modify_one(path: str) -> None:
        target = lookup(target_locator, path, "target")
        source = lookup(source_locator, path, "source")
        _copy_bytes(source.file, target.file)

    synced = 0
    for path in modified:
        if isolator.call("modified", path, modify_one, path):
            synced += 1
    return synced


def sync_removed(
    removed: Iterable[str],
    target_locator: AssetLocator,
    isolator: Optional[FailureIsolator] = None,
) -> Tuple[int, int]:
    """
    Delete removed files from the target tree.

    If a deletion leaves its immediate parent directory empty, that
    directory is removed too. Grandparents are never pruned.

    Returns (files removed, directories pruned).
    """
    isolator = isolator or FailureIsolator(logger)
    deleted = 0
    pruned = 0

    def remove_one(path: str) -> None:
        nonlocal deleted, pruned
        file = lookup(target_locator, path, "target").file
        try:
            file.unlink()
        except OSError as e:
            raise DeletionError(file.absolute(), e.strerror or str(e)) from e
        deleted += 1

        parent = file.parent
        if not any(parent.iterdir()):
            parent.rmdir()
            pruned += 1
            logger.debug(f"[sync-remove] Pruned empty directory {parent}")

    for path in removed:
        isolator.call("removed", path, remove_one, path)
    return deleted, pruned
