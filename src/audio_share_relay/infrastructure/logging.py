"""
Logging helpers for relay components.
"""

import logging
from typing import Optional

from .logging_manager import PACKAGE_LOGGER
from .logging_manager import setup_logging as _setup_logging


def setup_logging(
    component_name: str = PACKAGE_LOGGER,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging for a relay component.

    Args:
        component_name: Name of the component (e.g., 'audio_share_relay')
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. If None, the
                  environment level is used (development=DEBUG,
                  staging=INFO, production=WARNING)
        log_file: Log file path. Defaults to logs/<component_name>.log

    Returns:
        logging.Logger: Configured logger instance
    """
    if log_file is None:
        log_file = f"logs/{component_name}.log"
    return _setup_logging(component_name, log_level, log_file)


def get_logger(component_name: str) -> logging.Logger:
    """
    Get a logger under the relay package logger.

    ``get_logger("core.relay_engine")`` and
    ``get_logger("audio_share_relay.core.relay_engine")`` return the same
    logger, so handlers configured for the package apply to both.
    """
    if component_name == PACKAGE_LOGGER or component_name.startswith(
        PACKAGE_LOGGER + "."
    ):
        return logging.getLogger(component_name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{component_name}")
