"""Prometheus-style metrics for rollout checks without external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, HTTPServer
from threading import Lock, Thread


@dataclass
class _LabeledCounter:
    value: float = 0.0
    _lock: Lock = field(default_factory=Lock, repr=False)

    def inc(self, amount: float = 1.0) -> None:
        with self._lock:
            self.value += amount


@dataclass
class _LabeledSummary:
    count: int = 0
    total: float = 0.0
    _lock: Lock = field(default_factory=Lock, repr=False)

    def observe(self, value: float) -> None:
        with self._lock:
            self.count += 1
            self.total += value


@dataclass
class Counter:
    name: str
    description: str
    label_names: tuple[str, ...]
    values: dict[tuple[str, ...], _LabeledCounter] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def labels(self, **labels: str) -> _LabeledCounter:
        key = tuple(labels[name] for name in self.label_names)
        with self._lock:
            return self.values.setdefault(key, _LabeledCounter())


@dataclass
class Summary:
    name: str
    description: str
    label_names: tuple[str, ...]
    values: dict[tuple[str, ...], _LabeledSummary] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def labels(self, **labels: str) -> _LabeledSummary:
        key = tuple(labels[name] for name in self.label_names)
        with self._lock:
            return self.values.setdefault(key, _LabeledSummary())


ROLLOUT_OUTCOMES = Counter(
    name="deploywatch_rollout_outcomes_total",
    description="Count of deployment rollout checks by outcome",
    label_names=("outcome",),
)

ROLLOUT_DURATION = Summary(
    name="deploywatch_rollout_check_duration_seconds",
    description="Duration of deployment rollout checks",
    label_names=("outcome",),
)


class _MetricsHandler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:  # noqa: N802
        if self.path != "/metrics":
            self.send_response(404)
            self.end_headers()
            return
        body = render_metrics().encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/plain; version=0.0.4")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


_server_thread: Thread | None = None


def start_metrics_server(port: int = 8005) -> None:
    """Start a lightweight Prometheus-style metrics server."""
    global _server_thread
    if _server_thread:
        return

    server = HTTPServer(("0.0.0.0", port), _MetricsHandler)
    _server_thread = Thread(target=server.serve_forever, name="metrics", daemon=True)
    _server_thread.start()


def render_metrics() -> str:
    lines: list[str] = []
    lines.append(f"# HELP {ROLLOUT_OUTCOMES.name} {ROLLOUT_OUTCOMES.description}")
    lines.append(f"# TYPE {ROLLOUT_OUTCOMES.name} counter")
    for labels, counter in list(ROLLOUT_OUTCOMES.values.items()):
        label_str = f'outcome="{labels[0]}"'
        lines.append(f"{ROLLOUT_OUTCOMES.name}{{{label_str}}} {counter.value}")

    lines.append(f"# HELP {ROLLOUT_DURATION.name} {ROLLOUT_DURATION.description}")
    lines.append(f"# TYPE {ROLLOUT_DURATION.name} summary")
    for labels, summary in list(ROLLOUT_DURATION.values.items()):
        label_str = f'outcome="{labels[0]}"'
        lines.append(f"{ROLLOUT_DURATION.name}_count{{{label_str}}} {summary.count}")
        lines.append(f"{ROLLOUT_DURATION.name}_sum{{{label_str}}} {summary.total}")

    return "\n".join(lines) + "\n"
