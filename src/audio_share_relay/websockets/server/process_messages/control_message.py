"""
Session control message handler for the WebSocket relay server.

This module handles session lifecycle messages and latency pings.
"""

import logging
from typing import Any, Dict

from ....core import RelayEngine, SessionLifecycleManager
from ....core.types import (
    WS_MSG_CREATE_SESSION,
    WS_MSG_END_SESSION,
    WS_MSG_JOIN_SESSION,
    WS_MSG_LEAVE_SESSION,
    WS_MSG_PING,
)
from ....infrastructure.exceptions import MessageValidationError
from .schemas import (
    CreateSessionMessage,
    EndSessionMessage,
    JoinSessionMessage,
    LeaveSessionMessage,
    PingMessage,
)
from .utils import parse_payload


class ControlMessageHandler:
    """Handles control messages (create, join, leave, end, ping)."""

    def __init__(
        self,
        sessions: SessionLifecycleManager,
        engine: RelayEngine,
        logger: logging.Logger,
    ) -> None:
        self.sessions = sessions
        self.engine = engine
        self.logger = logger

        self._handlers = {
            WS_MSG_CREATE_SESSION: self._handle_create,
            WS_MSG_JOIN_SESSION: self._handle_join,
            WS_MSG_LEAVE_SESSION: self._handle_leave,
            WS_MSG_END_SESSION: self._handle_end,
            WS_MSG_PING: self._handle_ping,
        }

    async def process_control_message(
        self, connection_id: str, message_type: str, data: Dict[str, Any]
    ) -> None:
        """
        Process a decoded control message.

        Raises:
            MessageValidationError: If the type is not a control message or
                required fields are missing
        """
        handler = self._handlers.get(message_type)
        if handler is None:
            raise MessageValidationError(
                f"Unknown control message type: {message_type}", message_type
            )

        await handler(connection_id, parse_payload(message_type, data))

    async def _handle_create(
        self, connection_id: str, message: CreateSessionMessage
    ) -> None:
        await self.sessions.create_session(
            message.sessionId, message.hostName, connection_id
        )

    async def _handle_join(
        self, connection_id: str, message: JoinSessionMessage
    ) -> None:
        await self.sessions.join_session(
            message.sessionId, message.deviceName, connection_id
        )

    async def _handle_leave(
        self, connection_id: str, message: LeaveSessionMessage
    ) -> None:
        await self.sessions.leave_session(message.sessionId, connection_id)

    async def _handle_end(self, connection_id: str, message: EndSessionMessage) -> None:
        await self.sessions.end_session(message.sessionId, connection_id)

    async def _handle_ping(self, connection_id: str, message: PingMessage) -> None:
        await self.engine.ping(connection_id, message.timestamp)
