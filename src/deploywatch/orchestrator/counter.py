"""Shared pending counter for concurrent rollout checks."""

from __future__ import annotations

from threading import Lock


class PendingCounter:
    """Counts deployments whose rollout check has not finished yet.

    ``mark_processed`` is the only mutation. Every value in ``[0, total)`` is
    handed to exactly one caller, however the threads interleave.
    """

    def __init__(self, total: int) -> None:
        if total < 0:
            raise ValueError("total must be non-negative")
        self.total = total
        self._pending = total
        self._lock = Lock()

    @property
    def pending(self) -> int:
        with self._lock:
            return self._pending

    def mark_processed(self) -> int:
        """Decrement the pending count and return the value after decrement."""
        with self._lock:
            if self._pending > 0:
                self._pending -= 1
            return self._pending

    def pending_message(self, pending: int) -> str:
        if pending > 0:
            return f"[{pending}/{self.total} deployment(s) still pending]"
        return ""
