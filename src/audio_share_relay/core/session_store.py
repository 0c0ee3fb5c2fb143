"""
Session store for the Audio Share Relay.

Owns every active Session record, keyed by session id.
"""

from typing import Dict, Iterator, Optional

from ..infrastructure.exceptions import SessionNotFoundError
from .models import Session


class SessionStore:
    """In-memory map of session id -> Session."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def add(self, session: Session) -> Optional[Session]:
        """Insert a session, returning any record it replaced."""
        previous = self._sessions.get(session.id)
        self._sessions[session.id] = session
        return previous

    def get(self, session_id: str) -> Optional[Session]:
        """Get a session - O(1) lookup."""
        return self._sessions.get(session_id)

    def require(self, session_id: str) -> Session:
        """
        Get a session that must exist.

        Raises:
            SessionNotFoundError: If no active session has this id
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def remove(self, session_id: str) -> Optional[Session]:
        return self._sessions.pop(session_id, None)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(list(self._sessions.values()))

    def get_stats(self) -> Dict[str, int]:
        """Get store statistics."""
        return {
            "sessions": len(self._sessions),
            "members": sum(len(s.members) for s in self._sessions.values()),
        }
