"""
Session data structures for the Audio Share Relay.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .types import SESSION_STATUS_ACTIVE


def normalize_session_id(session_id: str) -> str:
    """Return the canonical (stripped, upper-case) form of a session id."""
    return session_id.strip().upper()


@dataclass
class Member:
    """A listener connection joined to a session."""

    connection_id: str
    display_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.connection_id, "name": self.display_name}


@dataclass
class Session:
    """One audio-sharing group: a host and the listeners that joined it."""

    id: str
    host_connection_id: str
    host_name: str
    members: List[Member] = field(default_factory=list)
    status: str = SESSION_STATUS_ACTIVE

    def is_host(self, connection_id: str) -> bool:
        return connection_id == self.host_connection_id

    def find_member(self, connection_id: str) -> Optional[Member]:
        for member in self.members:
            if member.connection_id == connection_id:
                return member
        return None

    def add_member(self, connection_id: str, display_name: str) -> Member:
        """Add a listener, or rename it in place if it already joined."""
        member = self.find_member(connection_id)
        if member is not None:
            member.display_name = display_name
            return member

        member = Member(connection_id=connection_id, display_name=display_name)
        self.members.append(member)
        return member

    def remove_member(self, connection_id: str) -> bool:
        """Remove a listener. Returns False if it was not a member."""
        before = len(self.members)
        self.members = [m for m in self.members if m.connection_id != connection_id]
        return len(self.members) != before

    def connection_ids(self) -> List[str]:
        """Host first, then members in join order."""
        return [self.host_connection_id] + [m.connection_id for m in self.members]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "host_id": self.host_connection_id,
            "host_name": self.host_name,
            "members": [m.to_dict() for m in self.members],
            "status": self.status,
        }
