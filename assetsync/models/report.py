"""
Report Models — Outcome of a sync run.

A report is a read-only summary assembled from the diagnostics the
passes emitted. The engine never raises an aggregate error; callers
that need pass/fail status check SyncReport.ok.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ItemFailure(BaseModel):
    """One asset path (or repository) that could not be synced."""

    operation: Literal["added", "modified", "removed", "stage", "pass"]
    target: str
    error: str
    error_type: str

    @classmethod
    def from_exception(cls, operation: str, target: str, exc: BaseException) -> "ItemFailure":
        return cls(
            operation=operation,
            target=target,
            error=str(exc) or exc.__class__.__name__,
            error_type=exc.__class__.__name__,
        )


class SyncReport(BaseModel):
    """Summary of one reconciliation run."""

    started_at_iso: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    added: int = 0
    modified: int = 0
    removed: int = 0
    pruned_dirs: int = 0
    staged: Dict[str, List[str]] = Field(default_factory=dict)
    warnings: List[str] = Field(default_factory=list)
    failures: List[ItemFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def failures_for(self, operation: str) -> List[ItemFailure]:
        """Failures recorded by a single pass."""
        return [f for f in self.failures if f.operation == operation]


class PlannedAction(BaseModel):
    """One filesystem change a sync run would make."""

    action: Literal["copy", "overwrite", "delete"]
    path: str
    source: Optional[str] = None
    target: str


class SyncPlan(BaseModel):
    """What a sync run would do, computed without touching the target tree."""

    actions: List[PlannedAction] = Field(default_factory=list)
    problems: List[str] = Field(default_factory=list)

    def count(self, action: str) -> int:
        return sum(1 for a in self.actions if a.action == action)
