"""Configuration sources for DEPLOYWATCH_* settings."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Protocol

ENV_PREFIX = "DEPLOYWATCH_"


class ConfigSource(Protocol):
    """Strategy interface for pulling configuration values from a backing store."""

    def get(self, key: str) -> str | None: ...


@dataclass(slots=True)
class EnvConfigSource:
    """Reads prefixed values from environment variables."""

    prefix: str = ENV_PREFIX

    def get(self, key: str) -> str | None:
        return os.getenv(f"{self.prefix}{key}")


@dataclass(slots=True)
class DotEnvConfigSource:
    """Reads prefixed ``KEY=value`` lines from a .env file, loaded once."""

    path: Path = Path(".env")
    prefix: str = ENV_PREFIX
    _values: dict[str, str] | None = field(default=None, init=False)

    def _load(self) -> dict[str, str]:
        values: dict[str, str] = {}
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return values
        for raw_line in lines:
            line = raw_line.strip()
            if line.startswith("export "):
                line = line[len("export "):].lstrip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = (part.strip() for part in line.split("=", 1))
            if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
                value = value[1:-1]
            values[key] = value
        return values

    def get(self, key: str) -> str | None:
        if self._values is None:
            self._values = self._load()
        return self._values.get(f"{self.prefix}{key}")


@dataclass(slots=True)
class ConfigAdapter:
    """First non-empty answer across sources, in order."""

    sources: tuple[ConfigSource, ...]

    def get(self, key: str, default: str | None = None) -> str | None:
        for source in self.sources:
            value = source.get(key)
            if value is not None:
                return value
        return default
