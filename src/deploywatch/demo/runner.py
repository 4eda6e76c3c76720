"""Scenario runner for deploywatch demos."""

from __future__ import annotations

from datetime import timedelta
from typing import TextIO

from deploywatch.demo.fixtures import ScenarioFixtures
from deploywatch.orchestrator.coordinator import StatusChecker
from deploywatch.orchestrator.reporter import SummaryReporter

DEMO_DEADLINE = timedelta(seconds=1)
DEMO_POLL_INTERVAL = timedelta(milliseconds=50)


def run_scenario(
    fixtures: ScenarioFixtures,
    *,
    out: TextIO | None = None,
    default_deadline: timedelta = DEMO_DEADLINE,
    poll_interval: timedelta = DEMO_POLL_INTERVAL,
) -> None:
    """Run a status check against fixture deployments with compressed timings."""
    checker = StatusChecker(
        lister=fixtures.lister,
        query=fixtures.query,
        reporter=SummaryReporter(out),
        default_deadline=default_deadline,
        poll_interval=poll_interval,
    )
    checker.run(namespace=fixtures.namespace, run_id=fixtures.run_id)
