"""Plugin configuration and logging setup."""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .reader import (
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TRANSIENT_ERRNOS,
    RetryPolicy,
)

# Configuration Constants
DEFAULT_CONFIG_PATH = "servercode.json"
DEFAULT_DATA_DIR = "data"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

# JSON key -> (field name, environment variable)
CONFIG_KEYS = {
    "logPath": ("log_path", "LOG_PATH"),
    "enableLog": ("enable_log", "ENABLE_LOG"),
    "maxAttempts": ("max_attempts", "MAX_ATTEMPTS"),
    "baseDelayMs": ("base_delay_ms", "BASE_DELAY_MS"),
    "transientErrnos": ("transient_errnos", "TRANSIENT_ERRNOS"),
    "lokiUrl": ("loki_url", "LOKI_URL"),
    "logLevel": ("log_level", "LOG_LEVEL"),
}


class ConfigurationError(Exception):
    """Custom exception for configuration-related errors."""

    pass


@dataclass(frozen=True)
class PluginConfig:
    """Settings for the server code command."""

    log_path: str = ""
    enable_log: bool = True
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay_ms: int = DEFAULT_BASE_DELAY_MS
    transient_errnos: Tuple[int, ...] = field(default=DEFAULT_TRANSIENT_ERRNOS)
    loki_url: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(self.max_attempts, self.base_delay_ms)


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


def _parse_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid integer for {name}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid integer for {name}: {value!r}")


def _parse_errnos(name: str, value: Any) -> Tuple[int, ...]:
    if isinstance(value, str):
        value = [part for part in value.split(",") if part.strip()]
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"Invalid errno list for {name}: {value!r}")
    return tuple(abs(_parse_int(name, item)) for item in value)


def _parse_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid string for {name}: {value!r}")
    return value.strip()


PARSERS = {
    "log_path": _parse_str,
    "enable_log": _parse_bool,
    "max_attempts": _parse_int,
    "base_delay_ms": _parse_int,
    "transient_errnos": _parse_errnos,
    "loki_url": _parse_str,
    "log_level": _parse_str,
}


class ConfigManager:
    """Loads plugin configuration from a JSON file and the environment."""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self.environ = os.environ if environ is None else environ
        self.config_path = self.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)
        self.data_dir = self.environ.get("DATA_DIR", DEFAULT_DATA_DIR)
        self.logger = logging.getLogger(self.__class__.__name__)

    def setup_logging(self, log_level: str = DEFAULT_LOG_LEVEL) -> None:
        """Configure application logging with file and console handlers."""
        numeric_level = getattr(logging, log_level.upper(), logging.INFO)
        log_file = os.path.join(self.data_dir, "servercode.log")
        handlers = [logging.StreamHandler()]

        try:
            os.makedirs(self.data_dir, exist_ok=True)
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        except OSError as e:
            self.logger.warning(f"Failed to setup file logging: {e}")

        logging.basicConfig(level=numeric_level, format=LOG_FORMAT, handlers=handlers)

    def _read_file(self) -> Dict[str, Any]:
        """Read the JSON config file; a missing file means defaults."""
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            self.logger.debug(f"No configuration file at {self.config_path}")
            return {}
        except json.JSONDecodeError:
            raise ConfigurationError(
                f"Invalid JSON in configuration file: {self.config_path}"
            )
        except OSError as e:
            raise ConfigurationError(f"Error loading configuration: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a JSON object: {self.config_path}"
            )
        return data

    def load(self) -> PluginConfig:
        """Build the plugin config; environment variables win over the file."""
        data = self._read_file()
        values = {}

        for key, (field_name, env_name) in CONFIG_KEYS.items():
            parse = PARSERS[field_name]
            if key in data and data[key] is not None:
                values[field_name] = parse(key, data[key])
            if env_name in self.environ:
                values[field_name] = parse(env_name, self.environ[env_name])

        if not values.get("loki_url"):
            values.pop("loki_url", None)

        config = PluginConfig(**values)
        try:
            config.retry_policy()
        except ValueError as e:
            raise ConfigurationError(f"Invalid retry settings: {e}")
        return config
