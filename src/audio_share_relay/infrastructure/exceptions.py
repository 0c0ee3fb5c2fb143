"""
Custom exceptions for the Audio Share Relay system.

This module defines all custom exceptions used throughout the relay,
providing clear error categorization and handling.
"""

from typing import Optional


class RelayError(Exception):
    """Base exception for all Audio Share Relay related errors."""

    pass


class ConfigurationError(RelayError):
    """Raised when there are configuration-related errors."""

    pass


class NetworkError(RelayError):
    """Raised when there are network communication errors."""

    pass


class WebSocketError(NetworkError):
    """Raised when there are WebSocket communication errors."""

    pass


class MessageValidationError(RelayError):
    """Raised when an inbound message cannot be decoded or validated."""

    def __init__(self, message: str, message_type: Optional[str] = None) -> None:
        super().__init__(message)
        self.message_type = message_type


class SessionError(RelayError):
    """Raised when there are session-related errors."""

    def __init__(self, message: str, session_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.session_id = session_id


class SessionNotFoundError(SessionError):
    """Raised when a session id does not name an active session."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found", session_id)


class UnauthorizedOperationError(SessionError):
    """Raised when a non-host connection attempts a host-only operation."""

    def __init__(self, session_id: str, connection_id: str, operation: str) -> None:
        super().__init__(
            f"Connection {connection_id} is not the host of session "
            f"{session_id} and cannot {operation}",
            session_id,
        )
        self.connection_id = connection_id
        self.operation = operation
