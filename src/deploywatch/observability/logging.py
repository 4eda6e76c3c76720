"""JSON logs on stderr, stamped with the fields of the current run."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
import json
import logging
import sys
from typing import Any

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
SERVICE_NAME = "deploywatch"


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    ``run_fields`` (run id, namespace, scenario) are added to every record and
    can be overridden by a record's own ``extra``.
    """

    def __init__(self, run_fields: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self.run_fields = {"service": SERVICE_NAME, **(run_fields or {})}

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "logger": record.name,
            "thread": record.threadName,
            **self.run_fields,
        }
        fields = getattr(record, "extra", None)
        if isinstance(fields, dict):
            payload.update(fields)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str = logging.INFO, **run_fields: Any) -> None:
    """Send JSON logs to stderr so stdout carries only the summary lines."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter({k: v for k, v in run_fields.items() if v is not None}))
    logging.basicConfig(level=level, handlers=[handler], force=True)
