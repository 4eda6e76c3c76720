"""In-memory stand-ins for the cluster, used by tests and the demo."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from threading import Lock

from deploywatch.contracts.errors import DiscoveryError
from deploywatch.contracts.models import WorkloadDescriptor


@dataclass(slots=True)
class FixtureWorkloadLister:
    """Returns a fixed set of workloads, optionally failing instead."""

    workloads: list[WorkloadDescriptor] = field(default_factory=list)
    error: DiscoveryError | None = None

    def list_workloads(self, namespace: str, run_id: str) -> list[WorkloadDescriptor]:
        if self.error is not None:
            raise self.error
        return list(self.workloads)


@dataclass(slots=True)
class ScriptedRolloutQuery:
    """Replays a scripted sequence of outputs per deployment.

    Each step is either a status string or an exception to raise. The last
    step repeats once the script runs out.
    """

    scripts: dict[str, deque[str | BaseException]] = field(default_factory=dict)
    calls: dict[str, int] = field(default_factory=dict)
    timeouts: dict[str, list[float | None]] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock)

    def register(self, name: str, steps: Iterable[str | BaseException]) -> None:
        self.scripts[name] = deque(steps)

    def rollout_status(self, name: str, timeout: float | None = None) -> str:
        with self._lock:
            self.calls[name] = self.calls.get(name, 0) + 1
            self.timeouts.setdefault(name, []).append(timeout)
            script = self.scripts[name]
            step = script.popleft() if len(script) > 1 else script[0]
        if isinstance(step, BaseException):
            raise step
        return step
