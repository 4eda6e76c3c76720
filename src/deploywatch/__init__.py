"""Rollout status checks for the deployments of a run."""

from deploywatch.contracts.errors import (  # noqa: F401
    ConfigError,
    DeployWatchError,
    DiscoveryError,
    RolloutQueryError,
    RolloutTimeoutError,
    StatusCheckError,
)
from deploywatch.orchestrator.coordinator import StatusChecker  # noqa: F401
