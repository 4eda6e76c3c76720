"""Deadline resolution for the deployments of the current run."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta
import logging
from typing import Protocol

from deploywatch.contracts.errors import DiscoveryError
from deploywatch.contracts.models import WorkloadDescriptor

logger = logging.getLogger(__name__)


class WorkloadLister(Protocol):
    """Lists the deployments labelled with a run identifier in a namespace."""

    def list_workloads(self, namespace: str, run_id: str) -> list[WorkloadDescriptor]:
        """Return the descriptors of matching deployments."""


def resolve_deadlines(
    workloads: Iterable[WorkloadDescriptor],
    *,
    namespace: str,
    run_id: str,
    default_deadline: timedelta,
) -> dict[str, timedelta]:
    """Map each deployment of this run to its effective deadline.

    A declared progress deadline can only shorten the default, never extend it.
    Deployments from another run, without the run label or outside
    ``namespace`` are left out.
    """
    deadlines: dict[str, timedelta] = {}
    for workload in workloads:
        if workload.namespace != namespace or workload.run_id != run_id:
            continue
        if workload.progress_deadline_seconds is None:
            deadlines[workload.name] = default_deadline
            continue
        declared = timedelta(seconds=workload.progress_deadline_seconds)
        deadlines[workload.name] = min(declared, default_deadline)
    return deadlines


def get_deployments(
    lister: WorkloadLister,
    *,
    namespace: str,
    run_id: str,
    default_deadline: timedelta,
) -> dict[str, timedelta]:
    """Discover this run's deployments and resolve their deadlines."""
    try:
        workloads = lister.list_workloads(namespace, run_id)
    except DiscoveryError as exc:
        logger.error(
            "discovery.failed",
            extra={"extra": {"namespace": namespace, "run_id": run_id, "error": str(exc)}},
        )
        raise
    deadlines = resolve_deadlines(
        workloads,
        namespace=namespace,
        run_id=run_id,
        default_deadline=default_deadline,
    )
    logger.debug(
        "discovery.resolved",
        extra={"extra": {"namespace": namespace, "run_id": run_id, "count": len(deadlines)}},
    )
    return deadlines
