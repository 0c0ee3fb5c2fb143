"""
Connection registry for the Audio Share Relay.

This module keeps the reverse index from a live connection to the session it
belongs to. It only stores session ids, never the Session records themselves.
"""

from typing import Dict, List, Optional, Tuple


class ConnectionRegistry:
    """Map connection_id -> session_id with O(1) lookups."""

    def __init__(self) -> None:
        self._sessions_by_connection: Dict[str, str] = {}

    def register(self, connection_id: str, session_id: str) -> Optional[str]:
        """Point a connection at a session, returning the previous session id."""
        previous = self._sessions_by_connection.get(connection_id)
        self._sessions_by_connection[connection_id] = session_id
        return previous

    def unregister(self, connection_id: str) -> Optional[str]:
        """Drop a connection's entry. Safe to call for unknown connections."""
        return self._sessions_by_connection.pop(connection_id, None)

    def unregister_many(self, connection_ids: List[str], session_id: str) -> None:
        """Drop the entries of the given connections that still point at session_id."""
        for connection_id in connection_ids:
            if self._sessions_by_connection.get(connection_id) == session_id:
                del self._sessions_by_connection[connection_id]

    def get_session_id(self, connection_id: str) -> Optional[str]:
        return self._sessions_by_connection.get(connection_id)

    def items(self) -> List[Tuple[str, str]]:
        """Snapshot of (connection_id, session_id) pairs."""
        return list(self._sessions_by_connection.items())

    def connections_for(self, session_id: str) -> List[str]:
        return [
            cid
            for cid, sid in self._sessions_by_connection.items()
            if sid == session_id
        ]

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._sessions_by_connection

    def __len__(self) -> int:
        return len(self._sessions_by_connection)
