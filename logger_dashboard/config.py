"""Configuration module: frozen dataclass loaded from YAML, env vars, and CLI args."""

import copy
import logging
import os
import sys
from dataclasses import dataclass, fields

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"

# YAML section/key -> Config field
_YAML_KEYS = {
    ("ingest", "url"): "ingest_url",
    ("ingest", "timeout"): "request_timeout",
    ("ingest", "max_workers"): "max_workers",
    ("auto_generate", "interval"): "auto_generate_interval",
    ("notifications", "max_size"): "max_notifications",
    ("form", "strict_validation"): "strict_form_validation",
    ("dashboard", "host"): "dashboard_host",
    ("dashboard", "port"): "dashboard_port",
    ("logging", "level"): "log_level",
}

_ENV_KEYS = {
    "INGEST_URL": "ingest_url",
    "REQUEST_TIMEOUT": "request_timeout",
    "MAX_WORKERS": "max_workers",
    "AUTO_GENERATE_INTERVAL": "auto_generate_interval",
    "MAX_NOTIFICATIONS": "max_notifications",
    "STRICT_FORM_VALIDATION": "strict_form_validation",
    "DASHBOARD_HOST": "dashboard_host",
    "DASHBOARD_PORT": "dashboard_port",
    "LOG_LEVEL": "log_level",
}


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    ingest_url: str = "http://localhost:3000/logs"
    request_timeout: float = 5.0
    max_workers: int = 8
    auto_generate_interval: float = 2.0
    max_notifications: int = 50
    strict_form_validation: bool = False
    dashboard_host: str = "0.0.0.0"
    dashboard_port: int = 5000
    log_level: str = "INFO"


_FIELD_TYPES = {f.name: f.type for f in fields(Config)}


def _coerce(key: str, value):
    """Convert a raw YAML/env/CLI value to the field's declared type."""
    kind = _FIELD_TYPES[key]
    if kind in (bool, "bool"):
        return _parse_bool(value)
    if kind in (int, "int"):
        return int(value)
    if kind in (float, "float"):
        return float(value)
    return str(value)


def load_yaml(path: str) -> dict:
    """Read the YAML config file into Config kwargs.

    A missing file yields no overrides; invalid YAML logs a warning and also
    yields no overrides.
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError:
        logger.warning("Invalid YAML in %s, using defaults", path)
        return {}

    if not isinstance(data, dict):
        return {}

    kwargs = {}
    for (section, key), name in _YAML_KEYS.items():
        block = data.get(section)
        if isinstance(block, dict) and key in block and block[key] is not None:
            kwargs[name] = _coerce(name, block[key])
    return kwargs


def _config_path(argv: list[str]) -> str:
    for i, arg in enumerate(argv):
        if arg.startswith("--config="):
            return arg.split("=", 1)[1]
        if arg == "--config" and i + 1 < len(argv):
            return argv[i + 1]
    return os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)


def load_config(argv: list[str] | None = None) -> Config:
    """Build Config from defaults <- YAML file <- env vars <- CLI args (highest priority).

    Unknown CLI options are ignored so the entry point can add its own.
    """
    if argv is None:
        argv = sys.argv[1:]

    kwargs: dict = copy.deepcopy(load_yaml(_config_path(argv)))

    for env_key, name in _ENV_KEYS.items():
        if env_key in os.environ:
            kwargs[name] = _coerce(name, os.environ[env_key])

    # CLI arg overrides (--key=value, --key value, or bare boolean --flag)
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg.startswith("--"):
            if "=" in arg:
                key, value = arg[2:].split("=", 1)
            elif i + 1 < len(argv) and not argv[i + 1].startswith("--"):
                key = arg[2:]
                value = argv[i + 1]
                i += 1
            else:
                key = arg[2:]
                value = "true"

            key = key.replace("-", "_")
            if key in _FIELD_TYPES:
                kwargs[key] = _coerce(key, value)
        i += 1

    return Config(**kwargs)
