"""Human-readable per-deployment summary lines."""

from __future__ import annotations

import logging
import sys
from threading import Lock
from typing import TextIO

from deploywatch.orchestrator.counter import PendingCounter

logger = logging.getLogger(__name__)


def format_summary(
    name: str, counter: PendingCounter, pending: int, error: BaseException | None
) -> str:
    pending_message = counter.pending_message(pending)
    line = f" - deployment/{name}"
    if error is None:
        line += " is ready."
        if pending_message:
            line += f" {pending_message}"
        return line + "\n"
    line += " failed."
    if pending_message:
        line += f" {pending_message}"
    return line + f" Error: {error}.\n"


class SummaryReporter:
    """Writes summary lines to a shared sink, one whole line at a time."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out if out is not None else sys.stdout
        self._lock = Lock()

    def _write(self, text: str) -> None:
        with self._lock:
            self._out.write(text)
            self._out.flush()

    def header(self) -> None:
        self._write("Waiting for deployments to stabilize\n")

    def print_summary(
        self, name: str, counter: PendingCounter, pending: int, error: BaseException | None
    ) -> None:
        self._write(format_summary(name, counter, pending, error))

    def progress(self, name: str, status: str) -> None:
        logger.debug("rollout.in_progress", extra={"extra": {"deployment": name, "status": status}})
