"""
Core WebSocket transport components.
"""

from .connection_manager import ConnectionManager

__all__ = [
    "ConnectionManager",
]
