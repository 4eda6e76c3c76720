"""Configuration for status checks: YAML file, then environment, then flags."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
from functools import lru_cache
import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from deploywatch.config_adapter import ConfigAdapter, DotEnvConfigSource, EnvConfigSource
from deploywatch.contracts.errors import ConfigError
from deploywatch.orchestrator.coordinator import DEFAULT_STATUS_CHECK_DEADLINE
from deploywatch.orchestrator.poller import DEFAULT_POLL_INTERVAL


@lru_cache
def _config_adapter() -> ConfigAdapter:
    dotenv_path = Path(os.getenv("DOTENV_PATH", ".env"))
    return ConfigAdapter((EnvConfigSource(), DotEnvConfigSource(path=dotenv_path)))


def get_config_value(key: str, default: str | None = None) -> str | None:
    return _config_adapter().get(key, default)


def _positive_number(key: str, raw: Any) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True, slots=True)
class StatusCheckConfig:
    """Settings for one status check cycle."""

    default_deadline: timedelta = DEFAULT_STATUS_CHECK_DEADLINE
    poll_interval: timedelta = DEFAULT_POLL_INTERVAL
    namespace: str = "default"
    kube_context: str | None = None
    kubectl_binary: str = "kubectl"

    @classmethod
    def load(cls, path: Path) -> StatusCheckConfig:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"could not read config {path}: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"config {path} must be a mapping")
        return cls().with_overrides(
            deadline_seconds=data.get("statusCheckDeadlineSeconds"),
            poll_interval_ms=data.get("pollIntervalMilliseconds"),
            namespace=data.get("namespace"),
            kube_context=data.get("kubeContext"),
            kubectl_binary=data.get("kubectl"),
        )

    @classmethod
    def from_env(cls, base: StatusCheckConfig | None = None) -> StatusCheckConfig:
        return (base or cls()).with_overrides(
            deadline_seconds=get_config_value("STATUS_CHECK_DEADLINE_SECONDS"),
            poll_interval_ms=get_config_value("POLL_INTERVAL_MS"),
            namespace=get_config_value("NAMESPACE"),
            kube_context=get_config_value("KUBE_CONTEXT"),
            kubectl_binary=get_config_value("KUBECTL"),
        )

    def with_overrides(
        self,
        *,
        deadline_seconds: Any = None,
        poll_interval_ms: Any = None,
        namespace: str | None = None,
        kube_context: str | None = None,
        kubectl_binary: str | None = None,
    ) -> StatusCheckConfig:
        """Return a copy with every non-empty override applied."""
        changes: dict[str, Any] = {}
        if deadline_seconds is not None:
            seconds = _positive_number("statusCheckDeadlineSeconds", deadline_seconds)
            changes["default_deadline"] = timedelta(seconds=seconds)
        if poll_interval_ms is not None:
            millis = _positive_number("pollIntervalMilliseconds", poll_interval_ms)
            changes["poll_interval"] = timedelta(milliseconds=millis)
        if namespace:
            changes["namespace"] = namespace
        if kube_context:
            changes["kube_context"] = kube_context
        if kubectl_binary:
            changes["kubectl_binary"] = kubectl_binary
        return replace(self, **changes)
