"""Deployment discovery through the Kubernetes API."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from pydantic import ValidationError
from urllib3.exceptions import HTTPError

from deploywatch.contracts.errors import DiscoveryError
from deploywatch.contracts.models import WorkloadDescriptor
from deploywatch.contracts.types import RUN_ID_LABEL

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0


@dataclass(slots=True)
class ClusterWorkloadLister:
    """Lists the deployments of a run with ``AppsV1Api``."""

    api: Any
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    @classmethod
    def from_kubeconfig(
        cls, kube_context: str | None = None, request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    ) -> "ClusterWorkloadLister":
        try:
            if kube_context:
                config.load_kube_config(context=kube_context)
            else:
                config.load_kube_config()
        except (ConfigException, OSError) as exc:
            raise DiscoveryError(f"could not load kubeconfig: {exc}") from exc
        return cls(api=client.AppsV1Api(), request_timeout=request_timeout)

    def list_workloads(self, namespace: str, run_id: str) -> list[WorkloadDescriptor]:
        selector = f"{RUN_ID_LABEL}={run_id}"
        logger.debug(
            "discovery.list",
            extra={"extra": {"namespace": namespace, "label_selector": selector}},
        )
        try:
            resp = self.api.list_namespaced_deployment(
                namespace=namespace,
                label_selector=selector,
                _request_timeout=self.request_timeout,
            )
        except ApiException as exc:
            raise DiscoveryError(
                f"could not fetch deployments: {exc.status} {exc.reason}"
            ) from exc
        except HTTPError as exc:
            raise DiscoveryError(f"could not fetch deployments: {exc}") from exc
        try:
            return [_descriptor_from_deployment(item) for item in resp.items or []]
        except (AttributeError, ValidationError) as exc:
            raise DiscoveryError(f"could not parse deployments: {exc}") from exc


def _descriptor_from_deployment(deployment: Any) -> WorkloadDescriptor:
    metadata = deployment.metadata
    spec = deployment.spec
    return WorkloadDescriptor(
        name=metadata.name,
        namespace=metadata.namespace or "",
        labels=metadata.labels or {},
        progress_deadline_seconds=spec.progress_deadline_seconds if spec is not None else None,
    )
