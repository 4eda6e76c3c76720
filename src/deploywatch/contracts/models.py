"""Domain models for rollout status checks."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from deploywatch.contracts.types import RUN_ID_LABEL, OutcomeKind


class WorkloadDescriptor(BaseModel):
    """Snapshot of a deployment taken at discovery time."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    progress_deadline_seconds: int | None = Field(default=None, ge=0)
    labels: dict[str, str] = Field(default_factory=dict)

    @property
    def run_id(self) -> str | None:
        return self.labels.get(RUN_ID_LABEL)


@dataclass(frozen=True, slots=True)
class RolloutSucceeded:
    """The deployment rolled out."""

    kind: OutcomeKind = OutcomeKind.SUCCESS


@dataclass(frozen=True, slots=True)
class RolloutRunning:
    """The deployment is still progressing."""

    status: str
    kind: OutcomeKind = OutcomeKind.RUNNING


@dataclass(frozen=True, slots=True)
class RolloutFailed:
    """The deployment reached a terminal error."""

    cause: BaseException
    kind: OutcomeKind = OutcomeKind.FAILED


RolloutOutcome = RolloutSucceeded | RolloutRunning | RolloutFailed
