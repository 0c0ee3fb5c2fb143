"""
Explicitly-owned relay state.

A RelayState bundles the Session Store, the Connection Registry and the lock
that serializes every read-modify-write across them. One instance is created
per relay server and injected into the lifecycle manager and relay engine.
"""

import asyncio
from typing import Dict

from .connection_registry import ConnectionRegistry
from .session_store import SessionStore


class RelayState:
    """Session Store + Connection Registry behind a single lock."""

    def __init__(self) -> None:
        self.sessions = SessionStore()
        self.registry = ConnectionRegistry()
        # Guards both stores and the room membership of the transport.
        self.lock = asyncio.Lock()

    def clear(self) -> None:
        """Drop all state. Used on server shutdown."""
        self.sessions = SessionStore()
        self.registry = ConnectionRegistry()

    def get_stats(self) -> Dict[str, int]:
        return {
            **self.sessions.get_stats(),
            "registered_connections": len(self.registry),
        }
