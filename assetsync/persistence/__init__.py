"""
Persistence — Append-only audit trail of sync runs.
"""

from .audit import AuditWriter, new_run_id

__all__ = ["AuditWriter", "new_run_id"]
