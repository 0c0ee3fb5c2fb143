"""
Unit tests for the session data model and the Session Store.
"""

import pytest

from audio_share_relay.core import Session, SessionStore, normalize_session_id
from audio_share_relay.infrastructure.exceptions import SessionNotFoundError


class TestSession:
    """Test cases for the Session record."""

    @pytest.mark.unit
    def test_new_session_is_active_and_empty(self):
        session = Session(id="AB12CD", host_connection_id="host", host_name="Laptop")

        assert session.status == "active"
        assert session.members == []
        assert session.is_host("host")
        assert not session.is_host("l1")

    @pytest.mark.unit
    def test_add_member_keeps_join_order(self):
        session = Session(id="AB12CD", host_connection_id="host", host_name="Laptop")
        session.add_member("l1", "Kitchen")
        session.add_member("l2", "Patio")

        assert [m.connection_id for m in session.members] == ["l1", "l2"]
        assert session.connection_ids() == ["host", "l1", "l2"]

    @pytest.mark.unit
    def test_rejoin_updates_member_in_place(self):
        session = Session(id="AB12CD", host_connection_id="host", host_name="Laptop")
        session.add_member("l1", "Kitchen")
        session.add_member("l2", "Patio")
        session.add_member("l1", "Kitchen Speaker")

        assert len(session.members) == 2
        assert session.members[0].display_name == "Kitchen Speaker"

    @pytest.mark.unit
    def test_duplicate_display_names_are_allowed(self):
        session = Session(id="AB12CD", host_connection_id="host", host_name="Laptop")
        session.add_member("l1", "Phone")
        session.add_member("l2", "Phone")

        assert len(session.members) == 2

    @pytest.mark.unit
    def test_remove_member(self):
        session = Session(id="AB12CD", host_connection_id="host", host_name="Laptop")
        session.add_member("l1", "Kitchen")

        assert session.remove_member("l1") is True
        assert session.remove_member("l1") is False
        assert session.remove_member("host") is False
        assert session.members == []

    @pytest.mark.unit
    def test_member_wire_format(self):
        session = Session(id="AB12CD", host_connection_id="host", host_name="Laptop")
        member = session.add_member("l1", "Kitchen")

        assert member.to_dict() == {"id": "l1", "name": "Kitchen"}

    @pytest.mark.unit
    def test_normalize_session_id(self):
        assert normalize_session_id(" ab12cd ") == "AB12CD"


class TestSessionStore:
    """Test cases for SessionStore."""

    @pytest.mark.unit
    def test_add_get_remove(self):
        store = SessionStore()
        session = Session(id="AB12CD", host_connection_id="host", host_name="Laptop")

        assert store.add(session) is None
        assert store.get("AB12CD") is session
        assert "AB12CD" in store
        assert len(store) == 1

        assert store.remove("AB12CD") is session
        assert store.get("AB12CD") is None
        assert store.remove("AB12CD") is None

    @pytest.mark.unit
    def test_add_returns_replaced_session(self):
        store = SessionStore()
        first = Session(id="AB12CD", host_connection_id="h1", host_name="One")
        second = Session(id="AB12CD", host_connection_id="h2", host_name="Two")

        store.add(first)
        assert store.add(second) is first
        assert store.get("AB12CD") is second

    @pytest.mark.unit
    def test_require_unknown_session_raises(self):
        store = SessionStore()

        with pytest.raises(SessionNotFoundError) as exc_info:
            store.require("ZZZZZZ")

        assert exc_info.value.session_id == "ZZZZZZ"

    @pytest.mark.unit
    def test_stats_count_members(self):
        store = SessionStore()
        session = Session(id="AB12CD", host_connection_id="host", host_name="Laptop")
        session.add_member("l1", "Kitchen")
        store.add(session)

        assert store.get_stats() == {"sessions": 1, "members": 1}
