"""kubectl-backed rollout status queries."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
import subprocess

from deploywatch.contracts.errors import RolloutQueryError, RolloutTimeoutError

logger = logging.getLogger(__name__)

CommandRunner = Callable[[list[str], float | None], subprocess.CompletedProcess[str]]


def run_command(cmd: list[str], timeout: float | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.run(cmd, capture_output=True, text=True, check=False, timeout=timeout)


@dataclass(slots=True)
class KubectlCLI:
    """Thin wrapper over the kubectl binary for one context and namespace."""

    namespace: str
    kube_context: str | None = None
    binary: str = "kubectl"
    runner: CommandRunner = run_command

    def command(self, *args: str, namespace: str | None = None) -> list[str]:
        cmd = [self.binary]
        if self.kube_context:
            cmd += ["--context", self.kube_context]
        cmd += ["--namespace", namespace or self.namespace]
        cmd += list(args)
        return cmd

    def rollout_status(self, name: str, timeout: float | None = None) -> str:
        """Run one non-watching ``rollout status`` query and return its output.

        The process is killed once ``timeout`` seconds pass, which surfaces as
        ``RolloutTimeoutError``.
        """
        cmd = self.command("rollout", "status", "deployment", name, "--watch=false")
        logger.debug(
            "kubectl.run", extra={"extra": {"command": " ".join(cmd), "timeout": timeout}}
        )
        try:
            proc = self.runner(cmd, timeout)
        except subprocess.TimeoutExpired as exc:
            raise RolloutTimeoutError(name, exc.timeout) from exc
        except OSError as exc:
            raise RolloutQueryError(name, str(exc)) from exc
        if proc.returncode != 0:
            reason = (proc.stderr or proc.stdout or "").strip() or f"exit code {proc.returncode}"
            raise RolloutQueryError(name, reason)
        return (proc.stdout or "").strip()
