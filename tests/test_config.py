"""Tests for status check configuration."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from deploywatch.config import StatusCheckConfig
from deploywatch.contracts.errors import ConfigError


def test_defaults() -> None:
    config = StatusCheckConfig()
    assert config.default_deadline == timedelta(minutes=10)
    assert config.poll_interval == timedelta(milliseconds=100)
    assert config.namespace == "default"
    assert config.kube_context is None


def test_load_yaml(tmp_path: Path) -> None:
    path = tmp_path / "deploywatch.yaml"
    path.write_text(
        "statusCheckDeadlineSeconds: 120\n"
        "pollIntervalMilliseconds: 250\n"
        "namespace: staging\n"
        "kubeContext: kind-dev\n",
        encoding="utf-8",
    )
    config = StatusCheckConfig.load(path)
    assert config.default_deadline == timedelta(seconds=120)
    assert config.poll_interval == timedelta(milliseconds=250)
    assert config.namespace == "staging"
    assert config.kube_context == "kind-dev"
    assert config.kubectl_binary == "kubectl"


def test_load_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert StatusCheckConfig.load(path) == StatusCheckConfig()


@pytest.mark.parametrize(
    "content",
    ["- just\n- a list\n", "statusCheckDeadlineSeconds: -5\n", "pollIntervalMilliseconds: soon\n"],
)
def test_load_rejects_invalid_config(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        StatusCheckConfig.load(path)


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        StatusCheckConfig.load(tmp_path / "missing.yaml")


def test_env_overrides_file_values(monkeypatch) -> None:
    monkeypatch.setenv("DEPLOYWATCH_STATUS_CHECK_DEADLINE_SECONDS", "45")
    monkeypatch.setenv("DEPLOYWATCH_NAMESPACE", "prod")
    base = StatusCheckConfig(namespace="staging", kube_context="kind-dev")
    config = StatusCheckConfig.from_env(base)
    assert config.default_deadline == timedelta(seconds=45)
    assert config.namespace == "prod"
    assert config.kube_context == "kind-dev"


def test_with_overrides_ignores_empty_values() -> None:
    config = StatusCheckConfig(namespace="staging").with_overrides(namespace=None, poll_interval_ms=20)
    assert config.namespace == "staging"
    assert config.poll_interval == timedelta(milliseconds=20)


def test_dotenv_values_apply_below_environment(tmp_path: Path, monkeypatch) -> None:
    from deploywatch import config as cfg

    dotenv = tmp_path / ".env"
    dotenv.write_text(
        "# local overrides\n"
        "export DEPLOYWATCH_NAMESPACE='from-dotenv'\n"
        'DEPLOYWATCH_KUBE_CONTEXT="kind-local"\n'
        "UNRELATED=1\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("DOTENV_PATH", str(dotenv))
    monkeypatch.setenv("DEPLOYWATCH_KUBE_CONTEXT", "from-env")
    cfg._config_adapter.cache_clear()  # type: ignore[attr-defined]

    config = StatusCheckConfig.from_env()
    assert config.namespace == "from-dotenv"
    assert config.kube_context == "from-env"
