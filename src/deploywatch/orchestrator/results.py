"""Result store and aggregation of per-deployment outcomes."""

from __future__ import annotations

from threading import Lock

from deploywatch.contracts.errors import StatusCheckError
from deploywatch.contracts.models import RolloutFailed, RolloutOutcome


class ResultStore:
    """Thread-safe mapping of deployment name to its rollout outcome."""

    def __init__(self) -> None:
        self._outcomes: dict[str, RolloutOutcome] = {}
        self._lock = Lock()

    def store(self, name: str, outcome: RolloutOutcome) -> None:
        with self._lock:
            if name in self._outcomes:
                raise ValueError(f"outcome for deployment {name} already recorded")
            self._outcomes[name] = outcome

    def get(self, name: str) -> RolloutOutcome | None:
        with self._lock:
            return self._outcomes.get(name)

    def items(self) -> list[tuple[str, RolloutOutcome]]:
        with self._lock:
            return list(self._outcomes.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)


def aggregate_status(store: ResultStore) -> StatusCheckError | None:
    """Reduce the store to one error naming every failed deployment, if any."""
    failures = {
        name: outcome.cause
        for name, outcome in store.items()
        if isinstance(outcome, RolloutFailed)
    }
    if not failures:
        return None
    return StatusCheckError(failures)
