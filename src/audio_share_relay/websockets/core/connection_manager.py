"""
Connection and room registry for the WebSocket relay server.

This module tracks every live websocket by connection id, groups connection
ids into rooms (one room per session), and delivers JSON messages to a single
connection or a whole room on a best-effort basis.
"""

import asyncio
import json
import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Set

from websockets.asyncio.server import ServerConnection
from websockets.exceptions import ConnectionClosed
from websockets.frames import CloseCode

from ...core.types import DEFAULT_SEND_TIMEOUT

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Simple and efficient client and room registry for the relay."""

    def __init__(self, send_timeout: float = DEFAULT_SEND_TIMEOUT) -> None:
        # Longest a single delivery may wait on a peer that is not reading
        self.send_timeout = send_timeout

        # Map connection_id -> WebSocket connection
        self.clients: Dict[str, ServerConnection] = {}

        # Map room -> set of connection_ids subscribed to it
        self.rooms: Dict[str, Set[str]] = defaultdict(set)

        # Closes of stalled connections still in progress
        self._closing: Set[asyncio.Task] = set()

    def register(self, connection_id: str, ws: ServerConnection) -> None:
        """Register a live connection."""
        self.clients[connection_id] = ws

    def unregister(self, connection_id: str) -> None:
        """Unregister a connection and drop it from every room."""
        self.clients.pop(connection_id, None)

        for room in [r for r, ids in self.rooms.items() if connection_id in ids]:
            self.leave_room(connection_id, room)

    def join_room(self, connection_id: str, room: str) -> None:
        """Subscribe a connection to a room."""
        self.rooms[room].add(connection_id)

    def leave_room(self, connection_id: str, room: str) -> None:
        """Unsubscribe a connection from a room. No-op if it was not in it."""
        members = self.rooms.get(room)
        if members is None:
            return
        members.discard(connection_id)
        if not members:
            del self.rooms[room]

    def close_room(self, room: str) -> Set[str]:
        """Dissolve a room, returning the connection ids that were in it."""
        return self.rooms.pop(room, set())

    def get_room_members(self, room: str) -> Set[str]:
        """Get connection ids subscribed to a room - O(1) lookup."""
        return set(self.rooms.get(room, set()))

    def get_client_websocket(self, connection_id: str) -> Optional[ServerConnection]:
        """Get WebSocket for a connection - O(1) lookup."""
        return self.clients.get(connection_id)

    def is_registered(self, connection_id: str) -> bool:
        """Check if connection is registered."""
        return connection_id in self.clients

    async def send(self, connection_id: str, message: Dict[str, Any]) -> bool:
        """Send a message to one connection. Returns False if it was not delivered."""
        delivered = await self.send_many([connection_id], message)
        return delivered == 1

    async def send_many(
        self, connection_ids: Iterable[str], message: Dict[str, Any]
    ) -> int:
        """
        Send the same message to several connections concurrently.

        Delivery is best-effort: unknown or closed connections are skipped and
        failures are logged, never raised. A connection that does not accept
        the message within send_timeout is treated as stalled: it is dropped
        from the registry and closed in the background, so one slow peer never
        holds up delivery to the others.

        Returns:
            Number of connections the message was handed to successfully
        """
        payload = json.dumps(message)

        targets: List[str] = []
        send_tasks = []
        for connection_id in connection_ids:
            ws = self.clients.get(connection_id)
            if ws is None:
                logger.debug(f"Skipping send to unknown connection {connection_id}")
                continue
            targets.append(connection_id)
            send_tasks.append(asyncio.wait_for(ws.send(payload), self.send_timeout))

        if not send_tasks:
            return 0

        results = await asyncio.gather(*send_tasks, return_exceptions=True)

        delivered = 0
        for connection_id, result in zip(targets, results):
            if isinstance(result, asyncio.TimeoutError):
                self._drop_stalled(connection_id)
            elif isinstance(result, ConnectionClosed):
                logger.debug(f"Connection {connection_id} closed before delivery")
            elif isinstance(result, Exception):
                logger.debug(f"Error sending to {connection_id}: {result}")
            else:
                delivered += 1
        return delivered

    def _drop_stalled(self, connection_id: str) -> None:
        """Stop sending to a connection that stopped reading, and close it."""
        ws = self.clients.pop(connection_id, None)
        if ws is None:
            return
        logger.warning(
            f"Connection {connection_id} did not accept a message within "
            f"{self.send_timeout}s, closing it"
        )
        task = asyncio.create_task(self._close_stalled(connection_id, ws))
        self._closing.add(task)
        task.add_done_callback(self._closing.discard)

    async def _close_stalled(self, connection_id: str, ws: ServerConnection) -> None:
        # close() aborts the TCP connection once the close timeout expires
        try:
            await ws.close(CloseCode.TRY_AGAIN_LATER, "send timeout")
        except Exception as e:
            logger.debug(f"Error closing stalled connection {connection_id}: {e}")

    async def wait_closed(self) -> None:
        """Wait for closes started on stalled connections to finish."""
        if self._closing:
            await asyncio.gather(*self._closing, return_exceptions=True)

    def get_stats(self) -> Dict[str, int]:
        """Get registry statistics."""
        return {
            "total_clients": len(self.clients),
            "rooms": len(self.rooms),
            "subscriptions": sum(len(ids) for ids in self.rooms.values()),
        }
