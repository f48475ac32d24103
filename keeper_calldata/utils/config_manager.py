"""
Settings loader with JSON schema validation

Settings come from environment overrides (KEEPER_CALLDATA_*) and from
command-line flags, with flags taking precedence. The merged result is
validated with jsonschema before it is handed to the rest of the tool.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional

import jsonschema

from .exceptions import ConfigurationError, ErrorCodes

LOG = logging.getLogger(__name__)

ENV_PREFIX = "KEEPER_CALLDATA_"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

SETTINGS_SCHEMA = {
    "type": "object",
    "properties": {
        "log_level": {"type": "string", "enum": LOG_LEVELS},
        "log_file": {"type": ["string", "null"], "minLength": 1},
    },
    "required": ["log_level"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class Settings:
    """Validated runtime settings"""
    log_level: str = "WARNING"
    log_file: Optional[str] = None


class ConfigManager:
    """
    Builds Settings from the environment and explicit overrides.

    The environment mapping is injectable so tests do not have to touch
    os.environ.
    """

    def __init__(self, environ: Mapping[str, str] = None):
        self.environ = os.environ if environ is None else environ

    def _get_env_override(self, key: str, default: Any = None) -> Any:
        """Get environment variable override"""
        env_value = self.environ.get(f"{ENV_PREFIX}{key.upper()}")

        # Exported but empty counts as unset
        if env_value:
            # Try to parse as JSON first
            try:
                return json.loads(env_value)
            except json.JSONDecodeError:
                return env_value

        return default

    def _validate(self, config: Dict[str, Any]) -> None:
        try:
            jsonschema.validate(config, SETTINGS_SCHEMA)
        except jsonschema.ValidationError as e:
            field = ".".join(str(p) for p in e.absolute_path) or None
            raise ConfigurationError(
                f"Invalid setting{' ' + repr(field) if field else ''}: {e.message}",
                field=field,
                value=e.instance,
                code=ErrorCodes.CONFIG_INVALID
            ) from e

    def load(self, **overrides: Any) -> Settings:
        """
        Load settings.

        Args:
            **overrides: Values from the command line; None means "not given"

        Returns:
            Validated Settings

        Raises:
            ConfigurationError: If any value fails the settings schema
        """
        defaults = asdict(Settings())
        config = {
            key: self._get_env_override(key, default)
            for key, default in defaults.items()
        }

        for key, value in overrides.items():
            if key not in defaults:
                raise ConfigurationError(f"Unknown setting: {key}", field=key)
            if value is not None:
                config[key] = value

        if isinstance(config.get("log_level"), str):
            config["log_level"] = config["log_level"].upper()

        self._validate(config)
        LOG.debug(f"Loaded settings: {config}")
        return Settings(**config)


def load_settings(environ: Mapping[str, str] = None, **overrides: Any) -> Settings:
    """Convenience function to load settings"""
    return ConfigManager(environ).load(**overrides)
