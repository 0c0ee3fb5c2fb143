"""
Inbound message models for the WebSocket relay server.

Each model validates the fields the relay itself reads. Unknown fields are
kept so relayed payloads can be forwarded untouched.
"""

from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, field_validator

from ....core.models import normalize_session_id
from ....core.types import (
    WS_MSG_AUDIO_CONTROL,
    WS_MSG_AUDIO_DATA,
    WS_MSG_CREATE_SESSION,
    WS_MSG_END_SESSION,
    WS_MSG_JOIN_SESSION,
    WS_MSG_LEAVE_SESSION,
    WS_MSG_PING,
)


class InboundMessage(BaseModel):
    """Base model for every inbound message."""

    model_config = ConfigDict(extra="allow")

    type: str


class SessionMessage(InboundMessage):
    """A message addressed to a session."""

    sessionId: str

    @field_validator("sessionId")
    @classmethod
    def _normalize_session_id(cls, value: str) -> str:
        value = normalize_session_id(value)
        if not value:
            raise ValueError("sessionId must not be empty")
        return value


class CreateSessionMessage(SessionMessage):
    hostName: str


class JoinSessionMessage(SessionMessage):
    deviceName: str


class LeaveSessionMessage(SessionMessage):
    pass


class EndSessionMessage(SessionMessage):
    pass


class AudioDataMessage(SessionMessage):
    """Audio samples are opaque to the relay and are not validated."""


class AudioControlMessage(SessionMessage):
    action: Optional[str] = None


class PingMessage(InboundMessage):
    # Echoed back untouched; clients may use any clock representation
    timestamp: Optional[Any] = None


MESSAGE_MODELS: Dict[str, Type[InboundMessage]] = {
    WS_MSG_CREATE_SESSION: CreateSessionMessage,
    WS_MSG_JOIN_SESSION: JoinSessionMessage,
    WS_MSG_LEAVE_SESSION: LeaveSessionMessage,
    WS_MSG_END_SESSION: EndSessionMessage,
    WS_MSG_AUDIO_DATA: AudioDataMessage,
    WS_MSG_AUDIO_CONTROL: AudioControlMessage,
    WS_MSG_PING: PingMessage,
}
