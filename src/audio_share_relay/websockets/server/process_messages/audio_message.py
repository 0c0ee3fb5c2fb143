"""
Audio message handler for the WebSocket relay server.

This module validates audio-data and audio-control messages and hands the
raw payload to the relay engine, which forwards it unchanged.
"""

import logging
from typing import Any, Dict

from ....core import RelayEngine
from ....core.types import WS_MSG_AUDIO_CONTROL, WS_MSG_AUDIO_DATA
from ....infrastructure.exceptions import MessageValidationError
from .utils import parse_payload


class AudioMessageHandler:
    """Handles audio message processing and routing."""

    def __init__(self, engine: RelayEngine, logger: logging.Logger) -> None:
        self.engine = engine
        self.logger = logger

    async def process_audio_message(
        self, connection_id: str, message_type: str, data: Dict[str, Any]
    ) -> None:
        """
        Relay an audio-data or audio-control message from a session host.

        Raises:
            MessageValidationError: If the message is not an audio message or
                has no session id
        """
        if message_type not in (WS_MSG_AUDIO_DATA, WS_MSG_AUDIO_CONTROL):
            raise MessageValidationError(
                f"Unknown audio message type: {message_type}", message_type
            )

        message = parse_payload(message_type, data)

        if message_type == WS_MSG_AUDIO_DATA:
            await self.engine.relay_audio_data(message.sessionId, connection_id, data)
        else:
            await self.engine.relay_audio_control(message.sessionId, connection_id, data)
