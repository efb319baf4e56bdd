"""
Failure Isolation — Keep one bad item from stopping the batch.

Every unit of work in a sync pass runs behind an isolator. A failure is
logged and recorded, then control returns to the caller as if the unit
had completed. Interrupts (KeyboardInterrupt, SystemExit) are not
caught: an externally stopped run leaves partial changes as they are.

## Usage

    from assetsync.reliability.isolation import FailureIsolator

    isolator = FailureIsolator()
    for path in paths:
        isolator.call("removed", path, delete_one, path)

    if isolator.failures:
        ...
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List

from ..models.report import ItemFailure

logger = logging.getLogger(__name__)


class FailureIsolator:
    """
    Runs units of work, converting their exceptions into diagnostics.

    Collects failures and warnings for the run so a report can be built
    afterwards. Holds no other state; a fresh isolator per run is normal.
    """

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logger
        self.failures: List[ItemFailure] = []
        self.warnings: List[str] = []

    def call(
        self,
        operation: str,
        target: str,
        fn: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> bool:
        """
        Execute fn(*args, **kwargs) with failures isolated.

        Returns True if the call completed, False if it raised.
        """
        try:
            fn(*args, **kwargs)
        except Exception as e:
            self.record(operation, target, e)
            return False
        return True

    def record(self, operation: str, target: str, exc: BaseException) -> ItemFailure:
        """Record and log a failure that was caught elsewhere."""
        failure = ItemFailure.from_exception(operation, target, exc)
        self.failures.append(failure)
        # stage failures are keyed by repository, everything else by asset path
        key = "repo" if operation == "stage" else "asset_path"
        self.log.error(
            f"[sync-{operation}] {target}: {failure.error_type}: {failure.error}",
            extra={"operation": operation, key: target},
        )
        self.log.debug(f"[sync-{operation}] traceback for {target}", exc_info=exc)
        return failure

    def warn(self, message: str) -> None:
        """Log a non-fatal anomaly. Behaviour of the pass is unchanged."""
        self.warnings.append(message)
        self.log.warning(message)

    @property
    def failed(self) -> bool:
        return bool(self.failures)


def call_safely(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> bool:
    """Run fn with a throwaway isolator. Returns False if it raised."""
    return FailureIsolator().call("pass", getattr(fn, "__name__", repr(fn)), fn, *args, **kwargs)
