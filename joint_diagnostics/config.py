"""Reporter configuration models and repository."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

import jsonschema

from joint_diagnostics.errors import ConfigError
from joint_diagnostics.reporter import DEFAULT_TEMPERATURE_ERROR_LEVEL

_OPTIONAL_KEYS = ("temperature_error_level", "rate_hz", "naoqi_url", "memory_service")


@dataclass(frozen=True)
class OutputConfig:
    """Where reports are published."""

    kafka_bootstrap: str
    topic: str = "diagnostics"


@dataclass(frozen=True)
class ReporterConfig:
    """Top-level configuration for the diagnostics reporter."""

    joints: Tuple[str, ...]
    output: OutputConfig
    temperature_error_level: float = DEFAULT_TEMPERATURE_ERROR_LEVEL
    rate_hz: float = 1.0
    naoqi_url: str = "tcp://127.0.0.1:9559"
    memory_service: str = "ALMemory"


class ConfigRepository:
    """Loads the reporter configuration from a local JSON file."""

    def __init__(self, path: str, schema_path: str | None = None) -> None:
        """Initialize with config file path and optional schema path."""
        self._path = Path(path)
        if schema_path is None:
            self._schema_path = Path(__file__).resolve().parent / "schemas" / "reporter_config.schema.json"
        else:
            self._schema_path = Path(schema_path)

    def load(self) -> ReporterConfig:
        """Load and validate reporter configuration."""
        if not self._path.exists():
            raise ConfigError(f"Config file not found: {self._path}")

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file: {exc}") from exc

        self._validate(raw)

        output = raw["output"]
        options = {key: raw[key] for key in _OPTIONAL_KEYS if key in raw}

        return ReporterConfig(
            joints=tuple(raw["joints"]),
            output=OutputConfig(**{key: output[key] for key in ("kafka_bootstrap", "topic") if key in output}),
            **options,
        )

    def _validate(self, raw: dict) -> None:
        """Validate config against the JSON Schema."""
        if not self._schema_path.exists():
            raise ConfigError(f"Config schema not found: {self._schema_path}")

        schema = json.loads(self._schema_path.read_text(encoding="utf-8"))
        try:
            jsonschema.validate(instance=raw, schema=schema)
        except jsonschema.ValidationError as exc:
            raise ConfigError(f"Config schema validation failed: {exc.message}") from exc
