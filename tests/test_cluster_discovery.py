"""Tests for deployment discovery through the Kubernetes API."""

from __future__ import annotations

from kubernetes import client
from kubernetes.client.exceptions import ApiException
import pytest
from urllib3.exceptions import MaxRetryError

from deploywatch.contracts.errors import DiscoveryError
from deploywatch.contracts.types import RUN_ID_LABEL
from deploywatch.discovery import cluster
from deploywatch.discovery.cluster import ClusterWorkloadLister


def _deployment(name: str, labels: dict[str, str] | None, deadline: int | None) -> client.V1Deployment:
    return client.V1Deployment(
        metadata=client.V1ObjectMeta(name=name, namespace="test", labels=labels),
        spec=client.V1DeploymentSpec(
            selector=client.V1LabelSelector(match_labels={"app": name}),
            template=client.V1PodTemplateSpec(),
            progress_deadline_seconds=deadline,
        ),
    )


class FakeAppsV1Api:
    """Answers ``list_namespaced_deployment`` with fixed deployments or an error."""

    def __init__(self, items: list[client.V1Deployment] | None = None, error: Exception | None = None) -> None:
        self.items = items or []
        self.error = error
        self.calls: list[dict[str, object]] = []

    def list_namespaced_deployment(self, namespace: str, **kwargs) -> client.V1DeploymentList:
        self.calls.append({"namespace": namespace, **kwargs})
        if self.error is not None:
            raise self.error
        return client.V1DeploymentList(items=self.items)


def test_list_workloads_maps_deployments() -> None:
    api = FakeAppsV1Api(
        [
            _deployment("dep1", {RUN_ID_LABEL: "run-1"}, 30),
            _deployment("dep2", None, None),
        ]
    )
    workloads = ClusterWorkloadLister(api=api).list_workloads("test", "run-1")

    assert [w.name for w in workloads] == ["dep1", "dep2"]
    assert workloads[0].progress_deadline_seconds == 30
    assert workloads[0].run_id == "run-1"
    assert workloads[0].namespace == "test"
    assert workloads[1].labels == {}
    assert workloads[1].progress_deadline_seconds is None
    assert api.calls[0]["namespace"] == "test"
    assert api.calls[0]["label_selector"] == f"{RUN_ID_LABEL}=run-1"


def test_list_workloads_empty() -> None:
    assert ClusterWorkloadLister(api=FakeAppsV1Api()).list_workloads("test", "run-1") == []


def test_api_error_becomes_discovery_error() -> None:
    api = FakeAppsV1Api(error=ApiException(status=403, reason="Forbidden"))
    with pytest.raises(DiscoveryError, match="403 Forbidden"):
        ClusterWorkloadLister(api=api).list_workloads("test", "run-1")


def test_unreachable_server_becomes_discovery_error() -> None:
    api = FakeAppsV1Api(error=MaxRetryError(None, "/apis/apps/v1", "connection refused"))
    with pytest.raises(DiscoveryError, match="could not fetch deployments"):
        ClusterWorkloadLister(api=api).list_workloads("test", "run-1")


def test_from_kubeconfig_uses_context(monkeypatch) -> None:
    seen: dict[str, object] = {}
    monkeypatch.setattr(cluster.config, "load_kube_config", lambda **kwargs: seen.update(kwargs))
    lister = ClusterWorkloadLister.from_kubeconfig("kind-dev")
    assert seen == {"context": "kind-dev"}
    assert isinstance(lister.api, client.AppsV1Api)


def test_from_kubeconfig_without_config(monkeypatch) -> None:
    def _missing(**kwargs):
        raise cluster.ConfigException("Invalid kube-config file. No configuration found.")

    monkeypatch.setattr(cluster.config, "load_kube_config", _missing)
    with pytest.raises(DiscoveryError, match="could not load kubeconfig"):
        ClusterWorkloadLister.from_kubeconfig()
