"""CLI entrypoint for deploywatch."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace
import logging
from pathlib import Path
import sys

from deploywatch.config import StatusCheckConfig
from deploywatch.contracts.errors import ConfigError, DiscoveryError, StatusCheckError
from deploywatch.demo import fixtures
from deploywatch.demo.runner import run_scenario
from deploywatch.discovery.cluster import ClusterWorkloadLister
from deploywatch.kubectl.cli import KubectlCLI
from deploywatch.observability.logging import LOG_LEVELS, configure_logging
from deploywatch.observability.metrics import start_metrics_server
from deploywatch.observability.telemetry import setup_tracing
from deploywatch.orchestrator.coordinator import StatusChecker
from deploywatch.orchestrator.reporter import SummaryReporter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ROLLOUT_FAILED = 1
EXIT_USAGE = 2

SCENARIOS = {
    "happy": fixtures.happy_path,
    "timeout": fixtures.timeout_path,
    "failure": fixtures.failure_path,
}


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="deploywatch", description="Wait for deployments of a run to stabilize."
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level for stderr JSON logs.",
    )
    parser.add_argument("--metrics-port", type=int, help="Serve /metrics on this port.")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Check the rollout of every deployment of a run.")
    check.add_argument("--run-id", required=True, help="Run identifier label value.")
    check.add_argument("--namespace", help="Namespace to check.")
    check.add_argument("--kube-context", help="kubectl context to use.")
    check.add_argument("--deadline-seconds", type=float, help="Default per-deployment deadline.")
    check.add_argument("--poll-interval-ms", type=float, help="Delay between status queries.")
    check.add_argument("--config", type=Path, help="Path to a deploywatch YAML config.")

    demo = sub.add_parser("demo", help="Run a status check against fixture deployments.")
    demo.add_argument("scenario", choices=sorted(SCENARIOS), help="Scenario to run.")
    return parser


def resolve_config(args: Namespace) -> StatusCheckConfig:
    base = StatusCheckConfig.load(args.config) if args.config else StatusCheckConfig()
    return StatusCheckConfig.from_env(base).with_overrides(
        deadline_seconds=args.deadline_seconds,
        poll_interval_ms=args.poll_interval_ms,
        namespace=args.namespace,
        kube_context=args.kube_context,
    )


def _check(args: Namespace) -> None:
    config = resolve_config(args)
    checker = StatusChecker(
        lister=ClusterWorkloadLister.from_kubeconfig(config.kube_context),
        query=KubectlCLI(
            namespace=config.namespace,
            kube_context=config.kube_context,
            binary=config.kubectl_binary,
        ),
        reporter=SummaryReporter(sys.stdout),
        default_deadline=config.default_deadline,
        poll_interval=config.poll_interval,
    )
    checker.run(namespace=config.namespace, run_id=args.run_id)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(
        args.log_level,
        run_id=getattr(args, "run_id", None),
        scenario=getattr(args, "scenario", None),
    )
    setup_tracing("deploywatch")
    if args.metrics_port:
        start_metrics_server(port=args.metrics_port)

    try:
        if args.command == "check":
            _check(args)
        else:
            run_scenario(SCENARIOS[args.scenario](), out=sys.stdout)
    except StatusCheckError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_ROLLOUT_FAILED
    except (ConfigError, DiscoveryError) as exc:
        logger.error("deploywatch.aborted", extra={"extra": {"error": str(exc)}})
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
