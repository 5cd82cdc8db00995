# src/tasklog/core/app_config.py

"""
Per-directory config.json.

Resolution order (later wins, field by field):
    DEFAULT_CONFIG < config.json < inline --config override
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from ..errors import NotFoundError, ValidationError
from .duration import Duration, TimeUnit, parse_duration
from .jsonfile import read_json, write_json

logger = logging.getLogger(__name__)

# JSON key -> dataclass attribute
CONFIG_KEYS: dict[str, str] = {
    "baseURL": "base_url",
    "apiKey": "api_key",
    "model": "model",
    "recency": "recency",
}


@dataclass(frozen=True, slots=True)
class AppConfig:
    base_url: str | None = None
    api_key: str | None = None
    model: str | None = None
    recency: Duration | None = None

    @classmethod
    def from_json(cls, raw: Any, *, label: str = "config") -> AppConfig:
        if not isinstance(raw, dict):
            raise ValidationError(f"{label}: expected a JSON object, got {type(raw).__name__}")

        unknown = sorted(k for k in raw if k not in CONFIG_KEYS)
        if unknown:
            logger.debug("%s: ignoring unknown keys %s", label, unknown)

        values: dict[str, Any] = {}
        for key, attr in CONFIG_KEYS.items():
            if key not in raw or raw[key] is None:
                continue
            val = raw[key]
            if key == "recency":
                values[attr] = Duration.from_json(val, label=f"{label}.recency")
            elif isinstance(val, str):
                values[attr] = val
            else:
                raise ValidationError(f"{label}.{key}: expected a string, got {type(val).__name__}")
        return cls(**values)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, attr in CONFIG_KEYS.items():
            val = getattr(self, attr)
            if val is None:
                continue
            out[key] = val.to_json() if isinstance(val, Duration) else val
        return out

    def merged(self, other: AppConfig) -> AppConfig:
        """Shallow merge: every field set on `other` wins."""
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **changes)


DEFAULT_CONFIG = AppConfig(
    base_url="http://localhost:11434/v1",
    api_key="ollama",
    model="llama3.2:latest",
    recency=Duration(count=1, unit=TimeUnit.DAY),
)


def parse_override(text: str | None) -> AppConfig:
    """Parse the inline --config JSON string."""
    if text is None or not text.strip():
        return AppConfig()
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"config override is not valid JSON: {e}") from e
    return AppConfig.from_json(raw, label="config override")


class ConfigStore:
    """Reads and writes <dir>/config.json."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load_file(self) -> AppConfig:
        """File contents only, without defaults or override."""
        if not self.exists():
            raise NotFoundError(
                f"config file not found: {self._path} (run `tasklog init` first)"
            )
        return AppConfig.from_json(read_json(self._path), label="config")

    def load(self, override: str | None = None) -> AppConfig:
        resolved = DEFAULT_CONFIG.merged(self.load_file()).merged(parse_override(override))
        logger.debug("Resolved config model=%s base_url=%s", resolved.model, resolved.base_url)
        return resolved

    def save(self, config: AppConfig) -> None:
        write_json(self._path, config.to_json())
        logger.info("Saved config to %s", self._path)

    def reset(self) -> None:
        self.save(DEFAULT_CONFIG)

    def set(self, key: str, value: str) -> AppConfig:
        """
        Set one key in the stored file.

        Only the file's own contents are rewritten: an inline override given on
        the same command line is not persisted.
        """
        attr = CONFIG_KEYS.get(key)
        if attr is None:
            choices = ", ".join(CONFIG_KEYS)
            raise ValidationError(f"unknown config key {key!r} (expected one of: {choices})")

        new_value: str | Duration = parse_duration(value) if key == "recency" else value
        config = replace(self.load_file(), **{attr: new_value})
        self.save(config)
        return config


def resolved_recency(config: AppConfig) -> Duration:
    if config.recency is not None:
        return config.recency
    return Duration(count=1, unit=TimeUnit.DAY)
