"""Fixture data for demo scenarios."""

from __future__ import annotations

from dataclasses import dataclass

from deploywatch.contracts.errors import RolloutQueryError
from deploywatch.contracts.models import WorkloadDescriptor
from deploywatch.contracts.types import RUN_ID_LABEL
from deploywatch.registry.fixture_store import FixtureWorkloadLister, ScriptedRolloutQuery

DEMO_NAMESPACE = "demo"
DEMO_RUN_ID = "demo-run-0001"

WAITING_1_OF_3 = "Waiting for rollout to finish: 1 of 3 updated replicas are available..."
WAITING_2_OF_3 = "Waiting for rollout to finish: 2 of 3 updated replicas are available..."


@dataclass(slots=True)
class ScenarioFixtures:
    """Cluster stand-ins for a scenario."""

    lister: FixtureWorkloadLister
    query: ScriptedRolloutQuery
    namespace: str = DEMO_NAMESPACE
    run_id: str = DEMO_RUN_ID


def _workload(
    name: str,
    *,
    namespace: str = DEMO_NAMESPACE,
    run_id: str | None = DEMO_RUN_ID,
    deadline: int | None = None,
) -> WorkloadDescriptor:
    labels = {"app": name}
    if run_id is not None:
        labels[RUN_ID_LABEL] = run_id
    return WorkloadDescriptor(
        name=name, namespace=namespace, labels=labels, progress_deadline_seconds=deadline
    )


def _base_workloads() -> list[WorkloadDescriptor]:
    return [
        _workload("web", deadline=600),
        _workload("api"),
        _workload("worker"),
        # Not part of this run: filtered out before polling.
        _workload("legacy", run_id="some-other-run"),
        _workload("sidecar", namespace="kube-system"),
    ]


def happy_path() -> ScenarioFixtures:
    query = ScriptedRolloutQuery()
    query.register("web", [WAITING_1_OF_3, WAITING_2_OF_3, 'deployment "web" successfully rolled out'])
    query.register("api", ['deployment "api" successfully rolled out'])
    query.register("worker", [WAITING_2_OF_3, 'deployment "worker" successfully rolled out'])
    return ScenarioFixtures(lister=FixtureWorkloadLister(_base_workloads()), query=query)


def timeout_path() -> ScenarioFixtures:
    scenario = happy_path()
    scenario.query.register("worker", [WAITING_1_OF_3])
    return scenario


def failure_path() -> ScenarioFixtures:
    scenario = timeout_path()
    scenario.query.register(
        "api", [RolloutQueryError("api", 'deployments.apps "api" not found')]
    )
    return scenario
