"""Shared constants and enums for deploywatch contracts."""

from __future__ import annotations

from enum import Enum

RUN_ID_LABEL = "deploywatch.dev/run-id"
ROLLOUT_SUCCESS_MARKER = "successfully rolled out"


class OutcomeKind(str, Enum):
    """Kinds of terminal or in-flight rollout outcomes."""

    SUCCESS = "success"
    RUNNING = "running"
    FAILED = "failed"
