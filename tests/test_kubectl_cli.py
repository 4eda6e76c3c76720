"""Tests for the kubectl rollout status adapter."""

from __future__ import annotations

import subprocess
import time

import pytest

from deploywatch.contracts.errors import RolloutQueryError, RolloutTimeoutError
from deploywatch.kubectl.cli import KubectlCLI

ROLLOUT_CMD = "kubectl --context kubecontext --namespace test rollout status deployment dep --watch=false"


class FakeRunner:
    """Records commands and returns a canned result."""

    def __init__(self, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.commands: list[str] = []
        self.timeouts: list[float | None] = []

    def __call__(self, cmd: list[str], timeout: float | None = None) -> subprocess.CompletedProcess[str]:
        self.commands.append(" ".join(cmd))
        self.timeouts.append(timeout)
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


class HangingRunner:
    """Behaves like a kubectl that never answers: waits out the timeout, then expires."""

    def __init__(self, hang_seconds: float = 5.0) -> None:
        self.hang_seconds = hang_seconds

    def __call__(self, cmd: list[str], timeout: float | None = None) -> subprocess.CompletedProcess[str]:
        if timeout is None or timeout >= self.hang_seconds:
            time.sleep(self.hang_seconds)
            return subprocess.CompletedProcess(cmd, 0, "Waiting for rollout to finish", "")
        time.sleep(timeout)
        raise subprocess.TimeoutExpired(cmd, timeout)


def _cli(runner) -> KubectlCLI:
    return KubectlCLI(namespace="test", kube_context="kubecontext", runner=runner)


def test_rollout_status_returns_output() -> None:
    runner = FakeRunner(stdout="Waiting for replicas to be available\n")
    assert _cli(runner).rollout_status("dep") == "Waiting for replicas to be available"
    assert runner.commands == [ROLLOUT_CMD]


def test_rollout_status_no_output() -> None:
    assert _cli(FakeRunner(stdout="")).rollout_status("dep") == ""


def test_rollout_status_error() -> None:
    runner = FakeRunner(stderr='Error from server (NotFound): deployments.apps "dep" not found', returncode=1)
    with pytest.raises(RolloutQueryError, match="not found") as excinfo:
        _cli(runner).rollout_status("dep")
    assert excinfo.value.deployment == "dep"


def test_rollout_status_missing_binary() -> None:
    def _missing(cmd: list[str], timeout: float | None = None) -> subprocess.CompletedProcess[str]:
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    cli = KubectlCLI(namespace="test", runner=_missing)
    with pytest.raises(RolloutQueryError):
        cli.rollout_status("dep")


def test_rollout_status_forwards_timeout_to_runner() -> None:
    runner = FakeRunner(stdout="deployment dep successfully rolled out")
    _cli(runner).rollout_status("dep", timeout=1.5)
    assert runner.timeouts == [1.5]


def test_hung_rollout_status_is_cut_off() -> None:
    started = time.monotonic()
    with pytest.raises(RolloutTimeoutError) as excinfo:
        _cli(HangingRunner()).rollout_status("dep", timeout=0.1)
    assert time.monotonic() - started < 1.0
    assert excinfo.value.deployment == "dep"


def test_run_command_kills_process_after_timeout(monkeypatch) -> None:
    seen: dict[str, object] = {}

    def _fake_run(cmd, **kwargs):
        seen.update(kwargs)
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", _fake_run)
    with pytest.raises(RolloutTimeoutError, match="could not stabilize within 0.25s"):
        KubectlCLI(namespace="test").rollout_status("dep", timeout=0.25)
    assert seen["timeout"] == 0.25
    assert seen["capture_output"] is True


def test_command_without_context() -> None:
    cli = KubectlCLI(namespace="test")
    assert cli.command("get", "pods") == ["kubectl", "--namespace", "test", "get", "pods"]
