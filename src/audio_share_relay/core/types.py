"""
Common types and constants for the Audio Share Relay.

This module centralizes the wire event names and defaults to avoid
hardcoding them throughout the codebase.
"""

from typing import Final, FrozenSet

# Envelope field carrying the event name
WS_FIELD_TYPE: Final[str] = "type"

# Inbound events (client -> relay)
WS_MSG_CREATE_SESSION: Final[str] = "create-session"
WS_MSG_JOIN_SESSION: Final[str] = "join-session"
WS_MSG_LEAVE_SESSION: Final[str] = "leave-session"
WS_MSG_END_SESSION: Final[str] = "end-session"
WS_MSG_AUDIO_DATA: Final[str] = "audio-data"
WS_MSG_AUDIO_CONTROL: Final[str] = "audio-control"
WS_MSG_PING: Final[str] = "ping"

# Outbound events (relay -> client)
WS_MSG_CONNECTED: Final[str] = "connected"
WS_MSG_SESSION_INFO: Final[str] = "session-info"
WS_MSG_DEVICE_CONNECTED: Final[str] = "device-connected"
WS_MSG_DEVICE_DISCONNECTED: Final[str] = "device-disconnected"
WS_MSG_SESSION_ENDED: Final[str] = "session-ended"
WS_MSG_SESSION_NOT_FOUND: Final[str] = "session-not-found"
WS_MSG_PONG: Final[str] = "pong"

AUDIO_EVENTS: Final[FrozenSet[str]] = frozenset(
    {WS_MSG_AUDIO_DATA, WS_MSG_AUDIO_CONTROL}
)

# Session status
SESSION_STATUS_ACTIVE: Final[str] = "active"

# Relay defaults, overridable from the environment
DEFAULT_RELAY_HOST: Final[str] = "0.0.0.0"
DEFAULT_RELAY_PORT: Final[int] = 8765
DEFAULT_PING_INTERVAL: Final[int] = 30
DEFAULT_MAX_CONNECTIONS: Final[int] = 100
DEFAULT_MAX_MESSAGE_SIZE: Final[int] = 2**20
DEFAULT_SEND_TIMEOUT: Final[float] = 5.0
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_API_HOST: Final[str] = "0.0.0.0"
DEFAULT_API_PORT: Final[int] = 8000
