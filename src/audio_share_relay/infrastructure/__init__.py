"""
Infrastructure components for the Audio Share Relay.

This package contains infrastructure concerns including:
- Logging configuration and utilities with production controls
- Custom exception definitions
"""

from .logging import setup_logging, get_logger
from .logging_manager import (
    LoggingManager,
    set_relay_log_level,
    Environment,
)
from .exceptions import (
    RelayError,
    ConfigurationError,
    NetworkError,
    WebSocketError,
    MessageValidationError,
    SessionError,
    SessionNotFoundError,
    UnauthorizedOperationError,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "LoggingManager",
    "set_relay_log_level",
    "Environment",
    # Exceptions
    "RelayError",
    "ConfigurationError",
    "NetworkError",
    "WebSocketError",
    "MessageValidationError",
    "SessionError",
    "SessionNotFoundError",
    "UnauthorizedOperationError",
]
