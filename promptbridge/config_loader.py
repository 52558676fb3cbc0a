"""Configuration loading from YAML files with environment variable support."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import dotenv_values

from .core.exceptions import ConfigurationError

logger = logging.getLogger("promptbridge")

# Default path to the config file (relative to project root)
DEFAULT_CONFIG_PATH = "configs/config_default.yaml"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def resolve_config_path(path: str) -> Path:
    """Resolve config path relative to project root if needed."""
    if Path(path).is_absolute():
        return Path(path)
    project_root = Path(__file__).parent.parent
    return project_root / path


def resolve_env_path(config_path: Path, env_path: str | None = None) -> Path:
    """Resolve the env file path for a config file.

    ``configs/config_default.yaml`` pairs with ``configs/.env_default``; any
    other file name pairs with a plain ``.env`` beside it.
    """
    if env_path:
        return resolve_config_path(env_path)
    stem = config_path.stem
    if stem.startswith("config_"):
        suffix = stem[len("config_"):]
        return config_path.with_name(f".env_{suffix}")
    return config_path.with_name(".env")


def load_env_values(env_path: Path) -> dict[str, str]:
    """Load environment values from a .env file without mutating os.environ."""
    if not env_path.exists():
        return {}
    raw_values = dotenv_values(env_path)
    return {key: value for key, value in raw_values.items() if value is not None}


def load_config(
    path: str | None = None,
    env_path: str | None = None,
    substitute_env: bool = True,
) -> dict:
    """Load configuration from a YAML file.

    Args:
        path: Path to the config file. Defaults to PROMPTBRIDGE_CONFIG,
              or configs/config_default.yaml in the project root.
        env_path: Optional .env path override for env substitution.
        substitute_env: Whether to substitute environment variables in the config.

    Returns:
        Parsed configuration dictionary.
    """
    if path is None:
        path = os.getenv("PROMPTBRIDGE_CONFIG") or DEFAULT_CONFIG_PATH

    config_path = resolve_config_path(path)

    logger.info(f"Loading configuration from {config_path}")

    if not config_path.exists():
        logger.error(f"Config file not found: {config_path}")
        raise RuntimeError(f"Config file not found: {config_path}")

    env_values: dict[str, str] = {}
    if substitute_env:
        env_file = resolve_env_path(config_path, env_path)
        if env_file.exists():
            logger.info(f"Loading environment variables from {env_file}")
            env_values = load_env_values(env_file)

    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    if substitute_env:
        data = _substitute_env_vars(data, env_values)

    logger.info(f"Configuration loaded successfully from {config_path}")
    return data


def _substitute_env_vars(
    obj: Any, env_values: Mapping[str, str] | None = None
) -> Any:
    """Recursively substitute environment variables in configuration values.

    Supports two formats:
    - ${VAR_NAME}: Braced format
    - $VAR_NAME: Simple format

    Values from the .env file win over the process environment. Unset
    variables are left as the literal placeholder.
    """
    env_values = env_values or {}

    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v, env_values) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_substitute_env_vars(item, env_values) for item in obj]
    if isinstance(obj, str):
        def replace_var(match):
            var_name = match.group(1) or match.group(2)
            value = env_values.get(var_name)
            if value is None:
                value = os.getenv(var_name)
            if value is None:
                logger.warning(
                    f"CONFIG ERROR: Environment variable '${var_name}' is not set! "
                    f"The literal placeholder will be used."
                )
                return match.group(0)
            return value

        return _ENV_VAR_RE.sub(replace_var, obj)
    return obj


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_port(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid server port: {value!r}") from exc


@dataclass
class ProxyConfig:
    """Resolved settings consumed by the translator and the HTTP app."""

    upstream_model_override: str | None = None
    trigger_signal: str | None = None  # None = new signal per request
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ProxyConfig":
        """Build settings from a parsed config file.

        Resolution order for each value:
        1. PROMPTBRIDGE_* environment variables
        2. ``proxy_settings`` section of the config
        3. Built-in defaults
        """
        data = data or {}
        proxy_settings = data.get("proxy_settings") or {}
        if not isinstance(proxy_settings, Mapping):
            raise ConfigurationError("proxy_settings must be a mapping")
        server_cfg = proxy_settings.get("server") or {}
        if not isinstance(server_cfg, Mapping):
            raise ConfigurationError("proxy_settings.server must be a mapping")

        override = _optional_str(os.getenv("PROMPTBRIDGE_UPSTREAM_MODEL"))
        if override is None:
            override = _optional_str(proxy_settings.get("upstream_model_override"))

        host = _optional_str(os.getenv("PROMPTBRIDGE_HOST"))
        if host is None:
            host = _optional_str(server_cfg.get("host")) or DEFAULT_HOST

        port_value = os.getenv("PROMPTBRIDGE_PORT")
        if port_value is None:
            port_value = server_cfg.get("port", DEFAULT_PORT)

        return cls(
            upstream_model_override=override,
            trigger_signal=_optional_str(proxy_settings.get("trigger_signal")),
            host=host,
            port=_parse_port(port_value),
        )


def load_proxy_config(path: str | None = None) -> ProxyConfig:
    """Load a config file and resolve it into a ProxyConfig."""
    config = ProxyConfig.from_mapping(load_config(path))
    if config.upstream_model_override:
        logger.info(f"Upstream model override: {config.upstream_model_override}")
    return config
