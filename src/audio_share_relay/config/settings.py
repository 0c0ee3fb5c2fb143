"""
Configuration management for the Audio Share Relay.

This module provides a clean, simple configuration system that reads the
relay and status API settings from the environment, optionally seeded from
a .env file.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from ..core.types import (
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_MESSAGE_SIZE,
    DEFAULT_PING_INTERVAL,
    DEFAULT_RELAY_HOST,
    DEFAULT_RELAY_PORT,
    DEFAULT_SEND_TIMEOUT,
)
from ..infrastructure import get_logger
from ..infrastructure.exceptions import ConfigurationError

logger = get_logger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class RelayConfig:
    """Configuration for the relay server and its status API."""

    # WebSocket relay
    host: str = DEFAULT_RELAY_HOST
    port: int = DEFAULT_RELAY_PORT
    ping_interval: int = DEFAULT_PING_INTERVAL
    max_connections: int = DEFAULT_MAX_CONNECTIONS
    max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE
    send_timeout: float = DEFAULT_SEND_TIMEOUT

    # Logging
    log_level: str = DEFAULT_LOG_LEVEL

    # HTTP status API
    api_enabled: bool = True
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT

    def __post_init__(self):
        """Post-initialization validation."""
        for name in ("port", "api_port"):
            value = getattr(self, name)
            if not 0 <= value <= 65535:
                raise ConfigurationError(f"{name} must be between 0 and 65535, got {value}")
        if self.ping_interval <= 0:
            raise ConfigurationError("ping_interval must be positive")
        if self.max_connections <= 0:
            raise ConfigurationError("max_connections must be positive")
        if self.max_message_size <= 0:
            raise ConfigurationError("max_message_size must be positive")
        if self.send_timeout <= 0:
            raise ConfigurationError("send_timeout must be positive")
        self.log_level = self.log_level.upper()


class RelayConfigManager:
    """Loads RelayConfig from environment variables."""

    def __init__(self, env_file_path: Optional[str] = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to environment file, or None to skip loading one
        """
        self.env_file_path = env_file_path
        self._load_environment()

    def _load_environment(self):
        """Load environment variables from file."""
        if not self.env_file_path:
            return
        if os.path.exists(self.env_file_path):
            load_dotenv(dotenv_path=self.env_file_path)
            logger.info(f"Loaded environment from {self.env_file_path}")
        else:
            logger.debug(f"Environment file {self.env_file_path} not found")

    def _get_optional_env(self, key: str, default: str) -> str:
        """
        Get optional environment variable.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            Environment variable value or default
        """
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    def _get_int_env(self, key: str, default: int) -> int:
        """
        Get an integer environment variable.

        Raises:
            ConfigurationError: If the value is not an integer
        """
        raw = self._get_optional_env(key, str(default))
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(
                f"Environment variable {key} must be an integer, got {raw!r}"
            ) from None

    def _get_float_env(self, key: str, default: float) -> float:
        """
        Get a numeric environment variable that may have a fraction.

        Raises:
            ConfigurationError: If the value is not a number
        """
        raw = self._get_optional_env(key, str(default))
        try:
            return float(raw)
        except ValueError:
            raise ConfigurationError(
                f"Environment variable {key} must be a number, got {raw!r}"
            ) from None

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """
        Get a boolean environment variable.

        Raises:
            ConfigurationError: If the value is not a recognised boolean
        """
        raw = self._get_optional_env(key, "true" if default else "false").lower()
        if raw in _TRUE_VALUES:
            return True
        if raw in _FALSE_VALUES:
            return False
        raise ConfigurationError(
            f"Environment variable {key} must be a boolean, got {raw!r}"
        )

    def get_config(self) -> RelayConfig:
        """
        Get the relay configuration.

        Returns:
            RelayConfig: Relay configuration

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        try:
            config = RelayConfig(
                host=self._get_optional_env("RELAY_HOST", DEFAULT_RELAY_HOST),
                port=self._get_int_env("RELAY_PORT", DEFAULT_RELAY_PORT),
                ping_interval=self._get_int_env(
                    "RELAY_PING_INTERVAL", DEFAULT_PING_INTERVAL
                ),
                max_connections=self._get_int_env(
                    "RELAY_MAX_CONNECTIONS", DEFAULT_MAX_CONNECTIONS
                ),
                max_message_size=self._get_int_env(
                    "RELAY_MAX_MESSAGE_SIZE", DEFAULT_MAX_MESSAGE_SIZE
                ),
                send_timeout=self._get_float_env(
                    "RELAY_SEND_TIMEOUT", DEFAULT_SEND_TIMEOUT
                ),
                log_level=self._get_optional_env("LOG_LEVEL", DEFAULT_LOG_LEVEL),
                api_enabled=self._get_bool_env("API_ENABLED", True),
                api_host=self._get_optional_env("API_HOST", DEFAULT_API_HOST),
                api_port=self._get_int_env("API_PORT", DEFAULT_API_PORT),
            )
        except ConfigurationError as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        logger.info("Configuration loaded successfully")
        return config
