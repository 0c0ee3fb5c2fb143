"""
FastAPI application exposing relay health and statistics.
"""

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI
from pydantic import BaseModel

from .. import __version__

if TYPE_CHECKING:
    from ..websockets.server import AudioRelayServer

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
    relay_running: bool


class StatsResponse(BaseModel):
    """Response model for relay statistics."""

    connections: int
    sessions: int
    members: int
    rooms: int
    audio_packets_relayed: int
    control_messages_relayed: int


def create_app(relay_server: "AudioRelayServer") -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        relay_server: The relay whose state is reported. It is only read.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Audio Share Relay API",
        description="Health and statistics for the audio share relay",
        version=__version__,
    )

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"message": "Audio Share Relay API", "version": __version__}

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy", relay_running=relay_server.is_running)

    @app.get("/stats", response_model=StatsResponse)
    async def get_stats():
        """Current relay statistics."""
        stats = relay_server.get_stats()
        return StatsResponse(
            connections=stats["connection_stats"]["total_clients"],
            sessions=stats["session_stats"]["sessions"],
            members=stats["session_stats"]["members"],
            rooms=stats["connection_stats"]["rooms"],
            audio_packets_relayed=stats["relay_stats"]["audio_packets_relayed"],
            control_messages_relayed=stats["relay_stats"]["control_messages_relayed"],
        )

    return app
