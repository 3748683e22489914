from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import jsonschema
import yaml

DEFAULT_PERIOD_SEC = 30.0
DEFAULT_STATUS_HOST = "0.0.0.0"
DEFAULT_STATUS_PORT = 9090


@dataclass(frozen=True)
class Settings:
    config_version: str
    environment: str
    app_log_path: str
    log_level: str
    config_path: Path
    raw: Dict[str, Any]


@dataclass(frozen=True)
class MetricsConfig:
    enabled: bool = True
    period_sec: float = DEFAULT_PERIOD_SEC
    totals_enabled: bool = True

    @staticmethod
    def from_settings(settings: Dict[str, Any]) -> "MetricsConfig":
        raw = settings.get("metrics", {}) or {}
        period_sec = float(raw.get("period_sec", DEFAULT_PERIOD_SEC))
        if period_sec <= 0:
            raise ValueError(f"metrics.period_sec must be > 0, got {period_sec}")
        return MetricsConfig(
            enabled=bool(raw.get("enabled", True)),
            period_sec=period_sec,
            totals_enabled=bool(raw.get("totals_enabled", True)),
        )


@dataclass(frozen=True)
class StatusConfig:
    enabled: bool = True
    host: str = DEFAULT_STATUS_HOST
    port: int = DEFAULT_STATUS_PORT

    @staticmethod
    def from_settings(settings: Dict[str, Any]) -> "StatusConfig":
        raw = settings.get("status", {}) or {}
        return StatusConfig(
            enabled=bool(raw.get("enabled", True)),
            host=str(raw.get("host", DEFAULT_STATUS_HOST)),
            port=int(raw.get("port", DEFAULT_STATUS_PORT)),
        )


def compute_config_hash(config_path: Path) -> str:
    data = config_path.read_bytes()
    return hashlib.sha256(data).hexdigest()


def load_yaml(path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(path.read_text())
    return data or {}


def validate_config(config: Dict[str, Any], schema_path: Path) -> None:
    schema = json.loads(schema_path.read_text())
    jsonschema.validate(instance=config, schema=schema)


def load_settings(config_path: Path, schema_path: Path) -> Settings:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    config = load_yaml(config_path)
    validate_config(config, schema_path)

    return Settings(
        config_version=str(config["config_version"]),
        environment=str(config["environment"]),
        app_log_path=str(config["app_log_path"]),
        log_level=str(config["log_level"]),
        config_path=config_path,
        raw=config,
    )
