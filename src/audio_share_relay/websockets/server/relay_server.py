"""
WebSocket relay server for audio sharing sessions.

This server accepts host and listener connections, dispatches their named
messages to the session lifecycle manager and the relay engine, and cleans
up after every connection when it closes.
"""

import asyncio
from http import HTTPStatus
from typing import Any, Dict, Optional

from websockets.asyncio.server import Server, ServerConnection, serve
from websockets.exceptions import ConnectionClosed
from websockets.frames import CloseCode
from websockets.http11 import Request, Response

from ...core import RelayEngine, RelayState, SessionLifecycleManager
from ...core.types import (
    AUDIO_EVENTS,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_MESSAGE_SIZE,
    DEFAULT_PING_INTERVAL,
    DEFAULT_RELAY_HOST,
    DEFAULT_RELAY_PORT,
    DEFAULT_SEND_TIMEOUT,
    WS_MSG_CONNECTED,
)
from ...infrastructure import set_relay_log_level, setup_logging
from ...infrastructure.exceptions import (
    ConfigurationError,
    MessageValidationError,
    WebSocketError,
)
from ..core import ConnectionManager
from .process_messages import (
    AudioMessageHandler,
    ConnectionUtils,
    ControlMessageHandler,
    decode_message,
)

logger = setup_logging("audio_share_relay")


class AudioRelayServer:
    """WebSocket server relaying audio from session hosts to listeners."""

    def __init__(
        self,
        host: str = DEFAULT_RELAY_HOST,
        port: int = DEFAULT_RELAY_PORT,
        ping_interval: int = DEFAULT_PING_INTERVAL,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
        max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE,
        send_timeout: float = DEFAULT_SEND_TIMEOUT,
        state: Optional[RelayState] = None,
    ) -> None:
        """Initialize the audio relay server."""
        self.host = host
        self.port = port
        self.server: Optional[Server] = None
        self.ping_interval = ping_interval
        self.max_connections = max_connections
        self.max_message_size = max_message_size
        self.send_timeout = send_timeout

        self.state = state if state is not None else RelayState()
        self.connections = ConnectionManager(send_timeout=send_timeout)
        self.sessions = SessionLifecycleManager(self.state, self.connections)
        self.engine = RelayEngine(self.state, self.connections)

        self._active_connections = 0

        # Initialize message handlers
        self.control_handler = ControlMessageHandler(self.sessions, self.engine, logger)
        self.audio_handler = AudioMessageHandler(self.engine, logger)

        self.stats = {
            "total_connections": 0,
            "rejected_connections": 0,
            "messages_received": 0,
            "invalid_messages": 0,
        }

    @property
    def is_running(self) -> bool:
        return self.server is not None

    @property
    def bound_port(self) -> Optional[int]:
        """The port actually bound, useful when started with port 0."""
        if self.server is None:
            return None
        for sock in self.server.sockets:
            return sock.getsockname()[1]
        return None

    @property
    def at_capacity(self) -> bool:
        return self._active_connections >= self.max_connections

    async def start(self) -> None:
        """
        Start the audio relay server.

        Raises:
            WebSocketError: If the listening socket cannot be bound
        """
        try:
            self.server = await serve(
                self._handle_connection,
                self.host,
                self.port,
                process_request=self._process_request,
                # Library keepalive closes peers that stop answering pings
                ping_interval=self.ping_interval,
                ping_timeout=self.ping_interval,
                close_timeout=self.send_timeout,
                max_size=self.max_message_size,
                compression=None,  # No compression for low latency
            )
        except OSError as e:
            raise WebSocketError(
                f"Failed to bind audio relay server to {self.host}:{self.port}: {e}"
            ) from e

        logger.info(f"Audio relay server started on {self.host}:{self.bound_port}")

    async def stop(self) -> None:
        """Stop the audio relay server."""
        if self.server:
            self.server.close()
            await self.server.wait_closed()
            self.server = None
            logger.info("Audio relay server stopped")

        await self.connections.wait_closed()
        self.state.clear()

    async def serve_forever(self) -> None:
        """Run until cancelled."""
        if self.server is None:
            raise RuntimeError("Server is not started")
        await self.server.serve_forever()

    def _process_request(
        self, connection: ServerConnection, request: Request
    ) -> Optional[Response]:
        """Refuse the websocket handshake while the relay is full."""
        if self.at_capacity:
            self.stats["rejected_connections"] += 1
            logger.warning(
                f"Refusing connection from {connection.remote_address}: "
                f"{self._active_connections} connections open"
            )
            return connection.respond(
                HTTPStatus.SERVICE_UNAVAILABLE, "Relay is at capacity\n"
            )
        return None

    async def _handle_connection(
        self, websocket: ServerConnection, path: Optional[str] = None
    ) -> None:
        """Handle incoming WebSocket connections."""
        client_address = websocket.remote_address
        connection_id = ConnectionUtils.connection_id(websocket)

        # Handshakes accepted concurrently may still overshoot the limit
        if self.at_capacity:
            self.stats["rejected_connections"] += 1
            await websocket.close(CloseCode.TRY_AGAIN_LATER, "relay at capacity")
            return

        self._active_connections += 1
        self.stats["total_connections"] += 1
        self.connections.register(connection_id, websocket)
        logger.info(f"New connection {connection_id} from {client_address}")

        try:
            await self.connections.send(
                connection_id, {"type": WS_MSG_CONNECTED, "id": connection_id}
            )
            async for message in websocket:
                await self._process_message(connection_id, message)
        except ConnectionClosed:
            logger.info(f"Connection closed: {client_address}")
        except Exception as e:
            logger.error(
                f"Error handling connection from {client_address}: {e}",
                exc_info=True,
            )
        finally:
            self._active_connections -= 1
            await ConnectionUtils.cleanup_connection(
                self.connections, self.sessions, connection_id, logger
            )

    async def _process_message(self, connection_id: str, message: Any) -> None:
        """Decode one frame and dispatch it. Never raises."""
        self.stats["messages_received"] += 1

        if isinstance(message, bytes):
            self.stats["invalid_messages"] += 1
            logger.warning(f"Ignoring binary frame from {connection_id}")
            return

        try:
            message_type, data = decode_message(message)
            if message_type in AUDIO_EVENTS:
                await self.audio_handler.process_audio_message(
                    connection_id, message_type, data
                )
            else:
                await self.control_handler.process_control_message(
                    connection_id, message_type, data
                )
        except MessageValidationError as e:
            self.stats["invalid_messages"] += 1
            logger.warning(f"Dropping message from {connection_id}: {e}")
        except Exception as e:
            logger.error(
                f"Error processing message from {connection_id}: {e}", exc_info=True
            )

    def get_stats(self) -> Dict[str, Any]:
        """Get server statistics."""
        return {
            "server_running": self.is_running,
            "server_stats": dict(self.stats),
            "session_stats": self.state.get_stats(),
            "connection_stats": self.connections.get_stats(),
            "relay_stats": self.engine.get_stats(),
        }


async def main() -> None:
    """Run the audio relay server, and the status API if enabled."""
    from ...api.server import run_api_server
    from ...config import RelayConfigManager

    config = RelayConfigManager().get_config()
    set_relay_log_level(config.log_level)

    server = AudioRelayServer(
        host=config.host,
        port=config.port,
        ping_interval=config.ping_interval,
        max_connections=config.max_connections,
        max_message_size=config.max_message_size,
        send_timeout=config.send_timeout,
    )

    await server.start()

    try:
        logger.info("Audio relay server running. Press Ctrl+C to stop.")
        tasks = [asyncio.create_task(server.serve_forever())]
        if config.api_enabled:
            tasks.append(
                asyncio.create_task(
                    run_api_server(
                        server,
                        host=config.api_host,
                        port=config.api_port,
                        log_level=config.log_level,
                    )
                )
            )

        # Whichever finishes first (e.g. the API server on Ctrl+C) stops the rest
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            task.result()
    finally:
        await server.stop()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down audio relay server...")
    except (ConfigurationError, WebSocketError) as e:
        logger.critical(f"Audio relay server failed to start: {e}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    run()
