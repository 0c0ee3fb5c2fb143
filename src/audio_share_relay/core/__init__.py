"""
Core components for the Audio Share Relay.

This package contains the session state, the session lifecycle and the
audio relay logic that form the backbone of the relay server.
"""

from .models import Member, Session, normalize_session_id
from .session_store import SessionStore
from .connection_registry import ConnectionRegistry
from .relay_state import RelayState
from .session_manager import SessionLifecycleManager, require_host
from .relay_engine import RelayEngine

__all__ = [
    "Member",
    "Session",
    "normalize_session_id",
    "SessionStore",
    "ConnectionRegistry",
    "RelayState",
    "SessionLifecycleManager",
    "require_host",
    "RelayEngine",
]
