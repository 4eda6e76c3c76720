"""Status check coordinator for the deployments of one run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
import logging
from threading import Thread
from time import perf_counter

from deploywatch.contracts.errors import DeployWatchError
from deploywatch.contracts.models import RolloutFailed, RolloutSucceeded
from deploywatch.discovery.deadlines import WorkloadLister, get_deployments
from deploywatch.observability.metrics import ROLLOUT_DURATION, ROLLOUT_OUTCOMES
from deploywatch.observability.telemetry import traced
from deploywatch.orchestrator.counter import PendingCounter
from deploywatch.orchestrator.poller import (
    DEFAULT_POLL_INTERVAL,
    RolloutStatusQuery,
    poll_rollout_status,
)
from deploywatch.orchestrator.reporter import SummaryReporter
from deploywatch.orchestrator.results import ResultStore, aggregate_status

logger = logging.getLogger(__name__)

DEFAULT_STATUS_CHECK_DEADLINE = timedelta(minutes=10)


@dataclass(slots=True)
class StatusChecker:
    """Waits for every deployment of a run to stabilize and reports the verdict."""

    lister: WorkloadLister
    query: RolloutStatusQuery
    reporter: SummaryReporter = field(default_factory=SummaryReporter)
    default_deadline: timedelta = DEFAULT_STATUS_CHECK_DEADLINE
    poll_interval: timedelta = DEFAULT_POLL_INTERVAL

    def run(self, *, namespace: str, run_id: str) -> None:
        """Check all deployments of ``run_id`` in ``namespace``.

        Raises ``DiscoveryError`` before any polling if the deployments cannot
        be listed, and ``StatusCheckError`` once every check has finished if
        any deployment failed.
        """
        with traced(
            "deploywatch.coordinator", "status_check", namespace=namespace, run_id=run_id
        ) as span:
            deadlines = get_deployments(
                self.lister,
                namespace=namespace,
                run_id=run_id,
                default_deadline=self.default_deadline,
            )
            span.set_attribute("deployments", len(deadlines))
            logger.info(
                "status_check.started",
                extra={"extra": {"namespace": namespace, "deployments": sorted(deadlines)}},
            )
            self.reporter.header()

            counter = PendingCounter(len(deadlines))
            results = ResultStore()
            threads = [
                Thread(
                    target=self._check_deployment,
                    args=(name, deadline, counter, results),
                    name=f"rollout-{name}",
                    daemon=True,
                )
                for name, deadline in deadlines.items()
            ]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

            error = aggregate_status(results)
            span.set_attribute("failed", len(error.failures) if error else 0)
            logger.info(
                "status_check.completed",
                extra={
                    "extra": {
                        "namespace": namespace,
                        "failed": sorted(error.failures) if error else [],
                    }
                },
            )
        if error is not None:
            raise error

    def _check_deployment(
        self,
        name: str,
        deadline: timedelta,
        counter: PendingCounter,
        results: ResultStore,
    ) -> None:
        with traced("deploywatch.poller", "rollout.poll", deployment=name) as span:
            started = perf_counter()
            error: BaseException | None = None
            try:
                poll_rollout_status(
                    name,
                    self.query,
                    deadline,
                    poll_interval=self.poll_interval,
                    on_progress=self.reporter.progress,
                )
            except DeployWatchError as exc:
                error = exc
            except Exception as exc:  # noqa: BLE001
                logger.exception(
                    "rollout.poll.crashed", extra={"extra": {"deployment": name}}
                )
                error = exc

            outcome = RolloutSucceeded() if error is None else RolloutFailed(cause=error)
            results.store(name, outcome)
            ROLLOUT_OUTCOMES.labels(outcome=outcome.kind.value).inc()
            ROLLOUT_DURATION.labels(outcome=outcome.kind.value).observe(perf_counter() - started)
            span.set_attribute("outcome", outcome.kind.value)

            pending = counter.mark_processed()
            if error is None:
                logger.info("status_check.workload.ready", extra={"extra": {"deployment": name}})
            else:
                logger.warning(
                    "status_check.workload.failed",
                    extra={"extra": {"deployment": name, "error": str(error)}},
                )
            self.reporter.print_summary(name, counter, pending, error)
