"""Rollout status polling for a single deployment."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
import logging
from time import monotonic, sleep
from typing import Protocol

from deploywatch.contracts.errors import RolloutTimeoutError
from deploywatch.contracts.types import ROLLOUT_SUCCESS_MARKER

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = timedelta(milliseconds=100)

ProgressCallback = Callable[[str, str], None]


class RolloutStatusQuery(Protocol):
    """Runs one rollout status query for a deployment."""

    def rollout_status(self, name: str, timeout: float | None = None) -> str:
        """Return the raw status text or raise ``RolloutQueryError``.

        A query still running after ``timeout`` seconds raises
        ``RolloutTimeoutError``.
        """


def poll_rollout_status(
    name: str,
    query: RolloutStatusQuery,
    timeout: timedelta,
    *,
    poll_interval: timedelta | None = None,
    on_progress: ProgressCallback | None = None,
) -> None:
    """Block until the deployment rolls out, its query fails, or ``timeout`` elapses.

    Query failures propagate as-is without a retry. Each query only gets the
    time left before the deadline, and running past it raises
    ``RolloutTimeoutError``.
    """
    interval = (poll_interval if poll_interval is not None else DEFAULT_POLL_INTERVAL).total_seconds()
    limit = timeout.total_seconds()
    started = monotonic()
    status = ""
    while True:
        remaining = max(0.0, limit - (monotonic() - started))
        try:
            status = query.rollout_status(name, timeout=remaining)
        except RolloutTimeoutError as exc:
            logger.debug(
                "rollout.query_cut_off",
                extra={"extra": {"deployment": name, "timeout_seconds": limit}},
            )
            raise RolloutTimeoutError(name, limit, status) from exc
        if ROLLOUT_SUCCESS_MARKER in status:
            return
        if on_progress is not None:
            on_progress(name, status)
        sleep(min(interval, max(0.0, limit - (monotonic() - started))))
        if monotonic() - started >= limit:
            logger.debug(
                "rollout.timed_out",
                extra={"extra": {"deployment": name, "timeout_seconds": limit}},
            )
            raise RolloutTimeoutError(name, limit, status)
