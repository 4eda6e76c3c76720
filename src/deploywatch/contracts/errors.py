"""Error taxonomy for the status check."""

from __future__ import annotations

from collections.abc import Mapping


class DeployWatchError(Exception):
    """Base class for all deploywatch errors."""


class ConfigError(DeployWatchError):
    """Configuration could not be loaded or is invalid."""


class DiscoveryError(DeployWatchError):
    """Listing the workloads of the current run failed."""


class RolloutQueryError(DeployWatchError):
    """The rollout status query could not be executed."""

    def __init__(self, deployment: str, reason: str) -> None:
        super().__init__(f"getting rollout status for deployment {deployment}: {reason}")
        self.deployment = deployment
        self.reason = reason


class RolloutTimeoutError(DeployWatchError):
    """The rollout did not stabilize before its deadline."""

    def __init__(self, deployment: str, timeout_seconds: float, last_status: str = "") -> None:
        super().__init__(f"could not stabilize within {timeout_seconds:g}s")
        self.deployment = deployment
        self.timeout_seconds = timeout_seconds
        self.last_status = last_status


class StatusCheckError(DeployWatchError):
    """One or more deployments failed their rollout."""

    def __init__(self, failures: Mapping[str, BaseException]) -> None:
        self.failures = dict(failures)
        lines = [
            f"deployment {name} failed due to {cause}" for name, cause in self.failures.items()
        ]
        super().__init__("\n".join(lines))
