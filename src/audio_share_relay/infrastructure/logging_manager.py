"""
Environment-aware logging management for the Audio Share Relay.

The relay ships a ``logging.yaml`` next to the package. It is applied once per
process with ``logging.config.dictConfig``; later calls only adjust levels.
When the YAML file is missing or unreadable a console handler (and optional
file handler) is attached to the requested logger instead.

The ``ENVIRONMENT`` variable picks the default level:
- development: DEBUG
- staging: INFO
- production: WARNING, and DEBUG handler levels in the YAML are raised to it
"""

import copy
import logging
import logging.config
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

PACKAGE_LOGGER = "audio_share_relay"

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "logging.yaml"

# Third-party loggers held at WARNING whatever the environment
NOISY_LOGGERS = (
    "websockets",
    "websockets.server",
    "uvicorn.access",
    "asyncio",
)


class Environment(Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


ENVIRONMENT_ALIASES = {
    "dev": Environment.DEVELOPMENT,
    "development": Environment.DEVELOPMENT,
    "stage": Environment.STAGING,
    "staging": Environment.STAGING,
    "prod": Environment.PRODUCTION,
    "production": Environment.PRODUCTION,
}

ENVIRONMENT_LEVELS = {
    Environment.DEVELOPMENT: "DEBUG",
    Environment.STAGING: "INFO",
    Environment.PRODUCTION: "WARNING",
}


class LoggingManager:
    """Applies the relay logging configuration for the current environment."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize logging manager.

        Args:
            config_path: YAML configuration to apply. Defaults to the
                logging.yaml shipped with the package.
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._environment = self._detect_environment()
        self._dict_config_applied = False

    def _detect_environment(self) -> Environment:
        value = os.getenv("ENVIRONMENT", "development").strip().lower()
        return ENVIRONMENT_ALIASES.get(value, Environment.DEVELOPMENT)

    def _load_yaml_config(self) -> Optional[Dict[str, Any]]:
        if not self.config_path.exists():
            return None

        try:
            with open(self.config_path, "r") as f:
                config = yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            logging.getLogger(__name__).warning(
                f"Failed to load logging config {self.config_path}: {e}"
            )
            return None

        if not isinstance(config, dict) or "handlers" not in config:
            logging.getLogger(__name__).warning(
                f"Ignoring logging config {self.config_path}: no handlers defined"
            )
            return None
        return config

    def _prepare_dict_config(
        self, config: Dict[str, Any], log_file: Optional[str]
    ) -> Dict[str, Any]:
        """Return a copy of config with the log file and environment applied."""
        config = copy.deepcopy(config)
        handlers = config["handlers"]

        if log_file and "file" in handlers:
            handlers["file"]["filename"] = log_file

        file_handler = handlers.get("file")
        if file_handler and file_handler.get("filename"):
            log_dir = os.path.dirname(file_handler["filename"])
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

        if self._environment is Environment.PRODUCTION:
            floor = ENVIRONMENT_LEVELS[Environment.PRODUCTION]
            for handler_config in handlers.values():
                if handler_config.get("level") == "DEBUG":
                    handler_config["level"] = floor
            package_config = config.get("loggers", {}).get(PACKAGE_LOGGER)
            if package_config is not None:
                package_config["level"] = floor

        return config

    def setup_logging(
        self,
        component_name: str,
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> logging.Logger:
        """
        Set up logging for a relay component.

        Args:
            component_name: Logger name, usually under ``audio_share_relay``
            log_level: Level for the component logger. Defaults to the
                environment level.
            log_file: Overrides the YAML file handler path

        Returns:
            The configured component logger
        """
        level = (log_level or self.default_level).upper()

        if not self._dict_config_applied:
            config = self._load_yaml_config()
            if config is None:
                return self._setup_basic_logging(component_name, level, log_file)
            logging.config.dictConfig(self._prepare_dict_config(config, log_file))
            self._dict_config_applied = True
            self._suppress_noisy_loggers()

        logger = logging.getLogger(component_name)
        logger.setLevel(level)
        return logger

    def _setup_basic_logging(
        self, component_name: str, level: str, log_file: Optional[str]
    ) -> logging.Logger:
        """Attach console and optional file handlers to one logger."""
        logger = logging.getLogger(component_name)
        logger.setLevel(level)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        self._suppress_noisy_loggers()
        return logger

    def _suppress_noisy_loggers(self) -> None:
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    @property
    def default_level(self) -> str:
        return ENVIRONMENT_LEVELS[self._environment]

    def get_environment(self) -> Environment:
        return self._environment


_logging_manager = LoggingManager()


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Set up logging for a component with the process-wide manager."""
    return _logging_manager.setup_logging(component_name, log_level, log_file)


def set_relay_log_level(log_level: str) -> None:
    """Apply a configured level (LOG_LEVEL) to every relay logger."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(log_level.upper())
