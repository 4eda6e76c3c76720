from pathlib import Path

import pytest

from deploywatch import config as cfg

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    # No spans exported and no real .env read during tests.
    monkeypatch.setenv("DEPLOYWATCH_DISABLE_TRACING", "1")
    monkeypatch.setenv("DOTENV_PATH", str(ROOT / "tests" / ".env.DO_NOT_USE"))
    for key in [
        "DEPLOYWATCH_STATUS_CHECK_DEADLINE_SECONDS",
        "DEPLOYWATCH_POLL_INTERVAL_MS",
        "DEPLOYWATCH_NAMESPACE",
        "DEPLOYWATCH_KUBE_CONTEXT",
        "DEPLOYWATCH_KUBECTL",
    ]:
        monkeypatch.delenv(key, raising=False)
    cfg._config_adapter.cache_clear()  # type: ignore[attr-defined]
    yield
    cfg._config_adapter.cache_clear()  # type: ignore[attr-defined]
