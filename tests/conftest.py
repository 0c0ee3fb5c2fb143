"""
Pytest configuration and shared fixtures for the Audio Share Relay test suite.

This module provides common fixtures and configuration for all tests.
"""

import asyncio
import json
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from audio_share_relay.config.settings import RelayConfig
from audio_share_relay.core import RelayEngine, RelayState, SessionLifecycleManager
from audio_share_relay.websockets.core import ConnectionManager


@pytest.fixture
def mock_config():
    """Create a relay configuration for testing."""
    return RelayConfig(
        host="127.0.0.1",
        port=0,
        ping_interval=30,
        max_connections=10,
        log_level="DEBUG",
        api_enabled=False,
    )


@pytest.fixture
def relay_state():
    """Create an empty relay state."""
    return RelayState()


@pytest.fixture
def connection_manager():
    """Create an empty connection/room registry."""
    return ConnectionManager()


@pytest.fixture
def session_manager(relay_state, connection_manager):
    """Create a lifecycle manager over the shared state."""
    return SessionLifecycleManager(relay_state, connection_manager)


@pytest.fixture
def relay_engine(relay_state, connection_manager):
    """Create a relay engine over the shared state."""
    return RelayEngine(relay_state, connection_manager)


@pytest.fixture
def mock_websocket():
    """Create a mock WebSocket connection for testing."""
    websocket = MagicMock()
    websocket.remote_address = ("127.0.0.1", 12345)
    websocket.send = AsyncMock()
    websocket.close = AsyncMock()
    return websocket


@pytest.fixture
def connect_client(connection_manager):
    """Register mock websockets under given connection ids."""

    def _connect(connection_id: str) -> MagicMock:
        websocket = MagicMock()
        websocket.id = connection_id
        websocket.remote_address = ("127.0.0.1", 40000)
        websocket.send = AsyncMock()
        websocket.close = AsyncMock()
        connection_manager.register(connection_id, websocket)
        return websocket

    return _connect


@pytest.fixture
def sent_messages():
    """Decode every JSON message sent through a mock websocket."""

    def _sent(websocket: MagicMock) -> List[Dict[str, Any]]:
        return [json.loads(c.args[0]) for c in websocket.send.await_args_list]

    return _sent


@pytest.fixture
def sent_types(sent_messages):
    """List the event types sent through a mock websocket."""

    def _types(websocket: MagicMock) -> List[str]:
        return [m["type"] for m in sent_messages(websocket)]

    return _types


@pytest.fixture
def stall_client():
    """Make a mock websocket behave like a peer that stopped reading."""

    async def _never_completes(*args, **kwargs):
        await asyncio.Event().wait()

    def _stall(websocket: MagicMock) -> MagicMock:
        websocket.send.side_effect = _never_completes
        return websocket

    return _stall


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )