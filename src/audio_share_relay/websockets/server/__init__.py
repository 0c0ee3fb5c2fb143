"""
Relay server accepting host and listener websocket connections.
"""

from .relay_server import AudioRelayServer, main, run

__all__ = ["AudioRelayServer", "main", "run"]
