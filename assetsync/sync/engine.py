"""
Sync Engine — Run all three passes and summarise the outcome.

Order is added, then modified, then removed. Each pass sits behind the
failure isolator as a whole, on top of the per-item isolation inside it,
so a failure outside any single item still lets the later passes run.

## Usage

    from assetsync.sync.engine import run_sync

    report = run_sync(changes, source_locator, target_locator, target_dir)
    if not report.ok:
        for failure in report.failures:
            ...
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from ..models.asset import AssetLocator, ChangeSets
from ..models.report import PlannedAction, SyncPlan, SyncReport
from ..reliability.isolation import FailureIsolator
from .errors import MissingRecordError
from .locator import RepoResolver, lookup
from .synchronizer import RepositoryGroup, Stager, sync_added, sync_modified, sync_removed
from .vcs import find_repo_root, stage_files

logger = logging.getLogger(__name__)


def _skip_staging(paths: Sequence[str], repo: Path) -> None:
    logger.info(
        f"[sync-git] Staging disabled, leaving {len(paths)} file(s) unstaged in {repo}",
        extra={"repo": str(repo)},
    )


def run_sync(
    changes: ChangeSets,
    source_locator: AssetLocator,
    target_locator: AssetLocator,
    target_dir: Path,
    repo_resolver: RepoResolver = find_repo_root,
    stager: Optional[Stager] = stage_files,
    isolator: Optional[FailureIsolator] = None,
) -> SyncReport:
    """
    Reconcile target_dir with the source tree. Never raises for item failures.

    Pass stager=None to copy added files without staging them; the
    report then lists nothing under staged.
    """
    isolator = isolator or FailureIsolator(logger)
    report = SyncReport()

    overlap = changes.overlapping()
    if overlap:
        isolator.warn(
            f"{len(overlap)} path(s) appear in more than one change set: "
            f"{', '.join(overlap[:5])}"
        )

    logger.info(
        f"[sync] Starting: {len(changes.added)} added, "
        f"{len(changes.modified)} modified, {len(changes.removed)} removed"
    )

    group = RepositoryGroup()
    counts = {"modified": 0, "removed": 0, "pruned": 0}

    def added_pass() -> None:
        nonlocal group
        group = sync_added(
            changes.added, source_locator, target_dir, repo_resolver,
            stager or _skip_staging, isolator,
        )

    def modified_pass() -> None:
        counts["modified"] = sync_modified(
            changes.modified, target_locator, source_locator, isolator
        )

    def removed_pass() -> None:
        counts["removed"], counts["pruned"] = sync_removed(
            changes.removed, target_locator, isolator
        )

    isolator.call("pass", "added", added_pass)
    isolator.call("pass", "modified", modified_pass)
    isolator.call("pass", "removed", removed_pass)

    unstaged = {f.target for f in isolator.failures if f.operation == "stage"}
    report.added = len(group)
    if stager is not None:
        report.staged = {
            str(repo): list(paths)
            for repo, paths in group.items()
            if str(repo) not in unstaged
        }
    report.modified = counts["modified"]
    report.removed = counts["removed"]
    report.pruned_dirs = counts["pruned"]
    report.warnings = list(isolator.warnings)
    report.failures = list(isolator.failures)

    level = logging.INFO if report.ok else logging.WARNING
    logger.log(
        level,
        f"[sync] Done: {report.added} added, {report.modified} modified, "
        f"{report.removed} removed, {len(report.failures)} failed",
    )
    return report


def plan_sync(
    changes: ChangeSets,
    source_locator: AssetLocator,
    target_locator: AssetLocator,
    target_dir: Path,
) -> SyncPlan:
    """Describe what run_sync would do, without touching the filesystem."""
    target_dir = Path(target_dir)
    plan = SyncPlan()

    for path in changes.added:
        target = target_dir / path
        try:
            source = lookup(source_locator, path, "source")
        except MissingRecordError as e:
            plan.problems.append(str(e))
            continue
        plan.actions.append(PlannedAction(
            action="overwrite" if target.exists() else "copy",
            path=path,
            source=str(source.file),
            target=str(target),
        ))

    for path in changes.modified:
        try:
            target = lookup(target_locator, path, "target")
            source = lookup(source_locator, path, "source")
        except MissingRecordError as e:
            plan.problems.append(str(e))
            continue
        plan.actions.append(PlannedAction(
            action="overwrite", path=path, source=str(source.file), target=str(target.file),
        ))

    for path in changes.removed:
        try:
            target = lookup(target_locator, path, "target")
        except MissingRecordError as e:
            plan.problems.append(str(e))
            continue
        plan.actions.append(PlannedAction(action="delete", path=path, target=str(target.file)))

    return plan
