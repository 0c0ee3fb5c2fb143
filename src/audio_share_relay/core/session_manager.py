"""
Session lifecycle management for the Audio Share Relay.

This module creates, joins, leaves and ends sessions and cleans up after
disconnected connections. Every operation mutates the Session Store, the
Connection Registry and the session room together under the relay state
lock, collects the messages it has to send, and delivers them once the lock
is released.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..infrastructure.exceptions import (
    SessionNotFoundError,
    UnauthorizedOperationError,
)
from ..websockets.core import ConnectionManager
from .models import Session
from .relay_state import RelayState
from .types import (
    WS_MSG_DEVICE_CONNECTED,
    WS_MSG_DEVICE_DISCONNECTED,
    WS_MSG_SESSION_ENDED,
    WS_MSG_SESSION_INFO,
    WS_MSG_SESSION_NOT_FOUND,
)

logger = logging.getLogger(__name__)

# (recipient connection ids, message) pairs, delivered in order
Outbox = List[Tuple[List[str], Dict[str, Any]]]


def require_host(session: Session, connection_id: str, operation: str) -> None:
    """
    Check that a connection is the host of a session.

    Raises:
        UnauthorizedOperationError: If the connection is not the host
    """
    if not session.is_host(connection_id):
        raise UnauthorizedOperationError(session.id, connection_id, operation)


class SessionLifecycleManager:
    """Creates, joins, leaves and ends sessions."""

    def __init__(self, state: RelayState, connections: ConnectionManager) -> None:
        self.state = state
        self.connections = connections

    async def create_session(
        self, session_id: str, host_name: str, host_connection_id: str
    ) -> Session:
        """
        Create a session hosted by host_connection_id.

        A live session with the same id is terminated first; its room is told
        the session ended (the creator excepted) before the new one replaces it.
        """
        outbox: Outbox = []
        async with self.state.lock:
            self._detach(host_connection_id, session_id, outbox)

            previous = self.state.sessions.get(session_id)
            if previous is not None:
                logger.info(
                    f"Session {session_id} re-created by {host_connection_id}, "
                    f"ending previous session hosted by {previous.host_connection_id}"
                )
                self._terminate(previous, outbox, skip=host_connection_id)

            session = Session(
                id=session_id,
                host_connection_id=host_connection_id,
                host_name=host_name,
            )
            self.state.sessions.add(session)
            self.state.registry.register(host_connection_id, session_id)
            self.connections.join_room(host_connection_id, session_id)

        logger.info(f"Created session {session_id} with host {host_name} ({host_connection_id})")
        await self._deliver(outbox)
        return session

    async def join_session(
        self, session_id: str, device_name: str, connection_id: str
    ) -> bool:
        """
        Join a listener to a session.

        Returns:
            True if the connection is now part of the session
        """
        outbox: Outbox = []
        async with self.state.lock:
            try:
                session = self.state.sessions.require(session_id)
            except SessionNotFoundError:
                logger.info(f"Session {session_id} not found for {connection_id}")
                outbox.append(
                    ([connection_id], {"type": WS_MSG_SESSION_NOT_FOUND, "sessionId": session_id})
                )
                joined = False
            else:
                info = {
                    "type": WS_MSG_SESSION_INFO,
                    "hostId": session.host_connection_id,
                    "hostName": session.host_name,
                }
                if session.is_host(connection_id):
                    outbox.append(([connection_id], info))
                else:
                    self._detach(connection_id, session_id, outbox)
                    member = session.add_member(connection_id, device_name)
                    self.state.registry.register(connection_id, session_id)
                    self.connections.join_room(connection_id, session_id)

                    outbox.append(([connection_id], info))
                    outbox.append(
                        (
                            [session.host_connection_id],
                            {"type": WS_MSG_DEVICE_CONNECTED, **member.to_dict()},
                        )
                    )
                    logger.info(f"Device {device_name} ({connection_id}) joined session {session_id}")
                joined = True

        await self._deliver(outbox)
        return joined

    async def leave_session(self, session_id: str, connection_id: str) -> None:
        """
        Leave a session. The host leaving ends it.

        Only the named session is touched: its member entry and room
        subscription for the connection are dropped, and the reverse mapping
        is cleared only when it points at that session. Naming a session the
        connection does not belong to leaves its current membership intact.
        """
        outbox: Outbox = []
        async with self.state.lock:
            self._leave(session_id, connection_id, outbox)
        await self._deliver(outbox)

    async def end_session(self, session_id: str, requester_connection_id: str) -> bool:
        """
        End a session on request of its host.

        Requests for unknown sessions or from non-hosts are ignored.

        Returns:
            True if the session was ended
        """
        outbox: Outbox = []
        async with self.state.lock:
            try:
                session = self.state.sessions.require(session_id)
                require_host(session, requester_connection_id, "end the session")
            except (SessionNotFoundError, UnauthorizedOperationError) as e:
                logger.debug(f"Ignoring end-session: {e}")
                return False
            self._terminate(session, outbox)

        await self._deliver(outbox)
        return True

    async def on_disconnect(self, connection_id: str) -> None:
        """Clean up after a closed connection. Safe to call more than once."""
        outbox: Outbox = []
        async with self.state.lock:
            session_id = self.state.registry.get_session_id(connection_id)
            if session_id is None:
                return
            self._leave(session_id, connection_id, outbox)
        await self._deliver(outbox)

    def _leave(self, session_id: str, connection_id: str, outbox: Outbox) -> None:
        session = self.state.sessions.get(session_id)
        if session is not None:
            removed = session.remove_member(connection_id)
            if session.is_host(connection_id):
                self._terminate(session, outbox)
            elif removed:
                outbox.append(
                    (
                        [session.host_connection_id],
                        {"type": WS_MSG_DEVICE_DISCONNECTED, "id": connection_id},
                    )
                )
                logger.info(f"Connection {connection_id} left session {session_id}")

        if self.state.registry.get_session_id(connection_id) == session_id:
            self.state.registry.unregister(connection_id)
        self.connections.leave_room(connection_id, session_id)

    def _detach(self, connection_id: str, target_session_id: str, outbox: Outbox) -> None:
        """Leave whatever other session the connection currently belongs to."""
        current = self.state.registry.get_session_id(connection_id)
        if current is not None and current != target_session_id:
            logger.info(f"Connection {connection_id} moving from session {current} to {target_session_id}")
            self._leave(current, connection_id, outbox)

    def _terminate(
        self, session: Session, outbox: Outbox, skip: Optional[str] = None
    ) -> None:
        """The only path that removes a session."""
        recipients = self.connections.get_room_members(session.id)
        recipients.update(session.connection_ids())
        recipients.discard(skip)
        outbox.append((sorted(recipients), {"type": WS_MSG_SESSION_ENDED}))

        self.state.registry.unregister_many(session.connection_ids(), session.id)
        self.state.sessions.remove(session.id)
        self.connections.close_room(session.id)
        logger.info(f"Ended session {session.id}")

    async def _deliver(self, outbox: Outbox) -> None:
        for recipients, message in outbox:
            if recipients:
                await self.connections.send_many(recipients, message)
