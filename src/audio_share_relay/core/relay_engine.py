"""
Audio relay engine for the Audio Share Relay.

Forwards audio-data and audio-control messages from a session's host to the
session room and answers latency pings. Payloads are opaque: they are
forwarded exactly as received.
"""

import logging
from typing import Any, Dict, List, Optional

from ..infrastructure.exceptions import (
    SessionNotFoundError,
    UnauthorizedOperationError,
)
from ..websockets.core import ConnectionManager
from .relay_state import RelayState
from .session_manager import require_host
from .types import WS_MSG_PONG

logger = logging.getLogger(__name__)


class RelayEngine:
    """Host-gated fan-out of audio messages to a session room."""

    def __init__(self, state: RelayState, connections: ConnectionManager) -> None:
        self.state = state
        self.connections = connections

        self.stats = {
            "audio_packets_relayed": 0,
            "audio_deliveries": 0,
            "control_messages_relayed": 0,
            "pings_answered": 0,
        }

    async def relay_audio_data(
        self, session_id: str, sender_connection_id: str, payload: Dict[str, Any]
    ) -> int:
        """
        Forward audio data from the host to every other room subscriber.

        Returns:
            Number of connections the payload was delivered to
        """
        recipients = await self._room_recipients(
            session_id, sender_connection_id, "relay audio data"
        )
        if recipients is None:
            return 0

        recipients = [cid for cid in recipients if cid != sender_connection_id]
        delivered = await self.connections.send_many(recipients, payload)
        self.stats["audio_packets_relayed"] += 1
        self.stats["audio_deliveries"] += delivered
        return delivered

    async def relay_audio_control(
        self, session_id: str, sender_connection_id: str, payload: Dict[str, Any]
    ) -> int:
        """
        Forward an audio control command to the whole room, host included.

        Returns:
            Number of connections the payload was delivered to
        """
        recipients = await self._room_recipients(
            session_id, sender_connection_id, "relay audio control"
        )
        if recipients is None:
            return 0

        delivered = await self.connections.send_many(recipients, payload)
        self.stats["control_messages_relayed"] += 1
        logger.debug(
            f"Relayed audio-control {payload.get('action')!r} in session {session_id} "
            f"to {delivered} connection(s)"
        )
        return delivered

    async def ping(
        self, connection_id: str, timestamp: Optional[Any] = None
    ) -> bool:
        """Answer a latency ping on the same connection."""
        message: Dict[str, Any] = {"type": WS_MSG_PONG}
        if timestamp is not None:
            message["timestamp"] = timestamp
        self.stats["pings_answered"] += 1
        return await self.connections.send(connection_id, message)

    async def _room_recipients(
        self, session_id: str, sender_connection_id: str, operation: str
    ) -> Optional[List[str]]:
        """Snapshot the room if the sender is the session host, else None."""
        async with self.state.lock:
            try:
                session = self.state.sessions.require(session_id)
                require_host(session, sender_connection_id, operation)
            except (SessionNotFoundError, UnauthorizedOperationError) as e:
                logger.debug(f"Ignoring relay request: {e}")
                return None
            return sorted(self.connections.get_room_members(session_id))

    def get_stats(self) -> Dict[str, int]:
        return dict(self.stats)
