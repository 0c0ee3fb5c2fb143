"""
Utility functions for connection management and message decoding.

This module provides helpers shared by the relay server and its message
handlers.
"""

import json
import logging
from typing import Any, Dict, Tuple

from pydantic import ValidationError
from websockets.asyncio.server import ServerConnection

from ....core import SessionLifecycleManager
from ....core.types import WS_FIELD_TYPE
from ....infrastructure.exceptions import MessageValidationError
from ...core import ConnectionManager
from .schemas import MESSAGE_MODELS, InboundMessage


def decode_message(message: str) -> Tuple[str, Dict[str, Any]]:
    """
    Decode a text frame into its event type and raw payload.

    Raises:
        MessageValidationError: If the frame is not a JSON object with a type
    """
    try:
        data = json.loads(message)
    except json.JSONDecodeError as e:
        raise MessageValidationError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MessageValidationError("Message must be a JSON object")

    message_type = data.get(WS_FIELD_TYPE)
    if not isinstance(message_type, str) or not message_type:
        raise MessageValidationError("Missing message type")

    return message_type, data


def parse_payload(message_type: str, data: Dict[str, Any]) -> InboundMessage:
    """
    Validate a raw payload against the model registered for its type.

    Raises:
        MessageValidationError: If the type is unknown or fields are invalid
    """
    model = MESSAGE_MODELS.get(message_type)
    if model is None:
        raise MessageValidationError(
            f"Unknown message type: {message_type}", message_type
        )

    try:
        return model.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise MessageValidationError(
            f"Invalid {message_type} message (fields: {fields})", message_type
        ) from e


class ConnectionUtils:
    """Utility functions for connection management."""

    @staticmethod
    def connection_id(websocket: ServerConnection) -> str:
        """The relay-wide identifier of a websocket connection."""
        return str(websocket.id)

    @staticmethod
    async def cleanup_connection(
        connections: ConnectionManager,
        sessions: SessionLifecycleManager,
        connection_id: str,
        logger: logging.Logger,
    ) -> None:
        """Clean up when connection is closed."""
        try:
            await sessions.on_disconnect(connection_id)
        finally:
            connections.unregister(connection_id)
            logger.info(f"Client disconnected: {connection_id}")
