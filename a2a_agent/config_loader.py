"""
Configuration loader for the A2A skill agent.

Overlays an optional YAML file onto the environment-derived configuration,
with support for environment variable interpolation.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from .config import Config, get_config
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"

# ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def resolve_env_vars(value: str) -> str:
    """Resolve ``${VAR}`` and ``${VAR:-default}`` references in a string."""

    def replace_match(match: re.Match) -> str:
        default_value = match.group(2) if match.group(2) is not None else ""
        return os.environ.get(match.group(1), default_value)

    return ENV_VAR_PATTERN.sub(replace_match, value)


def _substitute_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _substitute_env_vars_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_substitute_env_vars_recursive(item) for item in data]
    if isinstance(data, str):
        return resolve_env_vars(data)
    return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


def _as_optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


# section -> field -> converter
_SECTION_FIELDS: dict[str, dict[str, Any]] = {
    "gemini": {
        "api_key": str,
        "model": str,
        "base_url": str,
        "temperature": _as_optional_float,
    },
    "a2a": {
        "server_url": str,
        "timeout": float,
        "require_discovery": _as_bool,
    },
    "orchestrator": {
        "max_tool_rounds": int,
        "max_workers": int,
        "profile": str,
    },
    "langfuse": {
        "public_key": str,
        "secret_key": str,
        "host": str,
        "debug": _as_bool,
    },
}


def apply_overrides(app_config: Config, raw_config: dict) -> Config:
    """Apply values from a parsed YAML mapping onto ``app_config`` in place."""
    for section_name, fields in _SECTION_FIELDS.items():
        section_data = raw_config.get(section_name) or {}
        if not isinstance(section_data, dict):
            raise ConfigurationError(f"Config section '{section_name}' must be a mapping")
        section = getattr(app_config, section_name)
        for key, value in section_data.items():
            if key not in fields:
                logger.warning("Ignoring unknown config key '%s.%s'", section_name, key)
                continue
            # Empty strings from unset ${VAR} keep the environment default
            if value == "" or value is None:
                continue
            try:
                setattr(section, key, fields[key](value))
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid value for '{section_name}.{key}': {value!r}"
                ) from e

    logging_data = raw_config.get("logging") or {}
    if not isinstance(logging_data, dict):
        raise ConfigurationError("Config section 'logging' must be a mapping")
    if logging_data.get("level"):
        app_config.log_level = str(logging_data["level"])

    return app_config


def load_app_config(path: Optional[str] = None) -> Config:
    """
    Load application configuration.

    Starts from environment variables and overlays the YAML file at
    ``path`` (or ``CONFIG_PATH``, or ``config/config.yaml``) when it exists.

    Raises:
        ConfigurationError: If the file is not valid YAML or holds bad values.
    """
    app_config = get_config()

    explicit = path is not None or "CONFIG_PATH" in os.environ
    if path is None:
        path = os.environ.get("CONFIG_PATH", str(DEFAULT_CONFIG_PATH))
    config_path = Path(path)

    if not config_path.exists():
        if explicit:
            logger.warning("Config file not found at %s, using environment only", config_path)
        return app_config

    logger.debug("Loading configuration from %s", config_path)
    try:
        with open(config_path, "r") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if raw_config is None:
        return app_config
    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Configuration file {config_path} must be a mapping")

    return apply_overrides(app_config, _substitute_env_vars_recursive(raw_config))
