"""
Runs the status API next to the relay on the same event loop.
"""

from typing import TYPE_CHECKING

import uvicorn

from ..infrastructure import get_logger
from .app import create_app

if TYPE_CHECKING:
    from ..websockets.server import AudioRelayServer

logger = get_logger(__name__)


def build_api_server(
    relay_server: "AudioRelayServer",
    host: str = "0.0.0.0",
    port: int = 8000,
    log_level: str = "INFO",
) -> uvicorn.Server:
    """Create a uvicorn server for the status API without starting it."""
    config = uvicorn.Config(
        app=create_app(relay_server),
        host=host,
        port=port,
        log_level=log_level.lower(),
        # Keep the relay's dictConfig in place
        log_config=None,
    )
    return uvicorn.Server(config)


async def run_api_server(
    relay_server: "AudioRelayServer",
    host: str = "0.0.0.0",
    port: int = 8000,
    log_level: str = "INFO",
) -> None:
    """
    Serve the status API until shutdown.

    uvicorn installs its own SIGINT/SIGTERM handlers while serving, so Ctrl+C
    makes this coroutine return and the caller then stops the relay.

    Args:
        relay_server: Relay whose health and statistics are reported
        host: Host to bind to
        port: Port to bind to
        log_level: uvicorn log level
    """
    server = build_api_server(relay_server, host, port, log_level)
    logger.info(f"Starting status API server on {host}:{port}")
    await server.serve()
    logger.info("Status API server stopped")
