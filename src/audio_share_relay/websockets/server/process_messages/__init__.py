"""
Inbound message decoding, validation and dispatch.

Session messages go to ControlMessageHandler; audio-data and audio-control go
to AudioMessageHandler.
"""

from .control_message import ControlMessageHandler
from .audio_message import AudioMessageHandler
from .utils import ConnectionUtils, decode_message, parse_payload

__all__ = [
    "ControlMessageHandler",
    "AudioMessageHandler",
    "ConnectionUtils",
    "decode_message",
    "parse_payload",
]
