"""YAML + environment variable configuration loading.

Config file: config/dsngate.yaml
Env var override prefix: DSNGATE_
Nesting convention: double underscore (e.g. DSNGATE_SERVER__PORT)
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

_DEFAULT_CONFIG_PATH = Path("config/dsngate.yaml")

_DEFAULTS: dict[str, Any] = {
    "server": {
        "port": 8081,
    },
    "dsn": {
        "auth_header": "X-Sentry-Auth",
        "allow_bare_auth_header": True,
    },
    "logging": {
        "level": "INFO",
    },
}

ENV_PREFIX = "DSNGATE_"


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base, recursively for nested dicts."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _coerce_value(value: str) -> int | bool | str:
    """Attempt to coerce a string env var value to a typed value.

    Every dsngate setting is a bool, an int or a string.
    """
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        pass
    return value


def _apply_env_overrides(config: dict) -> dict:
    """Apply DSNGATE_ prefixed environment variables as overrides.

    Double underscore separates nesting levels:
        DSNGATE_DSN__AUTH_HEADER=X-Auth -> config["dsn"]["auth_header"] = "X-Auth"
    """
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        parts = key[len(ENV_PREFIX) :].lower().split("__")
        target = config
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = _coerce_value(value)
    return config


def _validate(config: dict[str, Any]) -> dict[str, Any]:
    """Reject settings the server cannot start with. Raises ValueError."""
    port = config["server"]["port"]
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        raise ValueError(f"server.port must be an integer in 1-65535, got {port!r}")
    auth_header = config["dsn"]["auth_header"]
    if not isinstance(auth_header, str) or not auth_header.strip():
        raise ValueError("dsn.auth_header must be a non-empty header name")
    if not isinstance(config["dsn"]["allow_bare_auth_header"], bool):
        raise ValueError("dsn.allow_bare_auth_header must be true or false")
    return config


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file with env var overrides.

    Precedence (highest wins): env vars > YAML file > defaults.
    Raises ValueError when a setting is unusable.
    """
    config = copy.deepcopy(_DEFAULTS)

    path = config_path or _DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config = _deep_merge(config, file_config)

    return _validate(_apply_env_overrides(config))
