"""
Audit Ledger — Append-only NDJSON record of sync runs.

Each line is one JSON object (newline-delimited JSON).
Events are never edited, only appended. The ledger is optional; it gives
CI jobs a durable trail of what a run changed and what it could not.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

from ..models.asset import ChangeSets
from ..models.report import SyncReport


def new_run_id() -> str:
    """Identifier shared by every event of one run."""
    return f"R-{uuid4().hex[:8].upper()}"


class AuditWriter:
    """
    Append-only NDJSON audit ledger writer.

    Usage:
        audit = AuditWriter(Path("audit/sync.ndjson"))
        audit.emit("sync_start", run_id="R-123")
    """

    def __init__(self, path: Path):
        self.path = path
        self._ensure_exists()

    def _ensure_exists(self) -> None:
        """Ensure the audit file and directory exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.touch()

    def emit(
        self,
        event_type: str,
        run_id: str,
        level: str = "info",
        details: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Emit an audit event.

        Args:
            event_type: Type of event (sync_start, item_failed, sync_end)
            run_id: Identifier of the sync run
            level: Log level (info, warning, error)
            details: Additional event details

        Returns:
            Generated event_id
        """
        event_id = f"E-{uuid4().hex[:8].upper()}"
        now = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

        entry: Dict[str, Any] = {
            "ts_iso": now,
            "event_id": event_id,
            "run_id": run_id,
            "level": level,
            "type": event_type,
        }
        if details is not None:
            entry["details"] = details

        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

        return event_id

    def emit_sync_start(
        self,
        run_id: str,
        changes: ChangeSets,
        source_dir: Path,
        target_dir: Path,
    ) -> str:
        """Emit a sync_start event."""
        return self.emit(
            event_type="sync_start",
            run_id=run_id,
            details={
                "source_dir": str(source_dir),
                "target_dir": str(target_dir),
                "added": len(changes.added),
                "modified": len(changes.modified),
                "removed": len(changes.removed),
            },
        )

    def emit_report(self, run_id: str, report: SyncReport) -> str:
        """Emit one event per warning and failure, then sync_end. Returns the sync_end id."""
        for warning in report.warnings:
            self.emit(
                event_type="item_warning",
                run_id=run_id,
                level="warning",
                details={"message": warning},
            )

        for failure in report.failures:
            self.emit(
                event_type="item_failed",
                run_id=run_id,
                level="error",
                details=failure.model_dump(),
            )

        return self.emit(
            event_type="sync_end",
            run_id=run_id,
            level="info" if report.ok else "error",
            details={
                "added": report.added,
                "modified": report.modified,
                "removed": report.removed,
                "pruned_dirs": report.pruned_dirs,
                "staged": report.staged,
                "failed": len(report.failures),
            },
        )
