"""
Architecture tests for the Audio Share Relay.

This test suite verifies that the package layout works correctly and all
components can be imported, instantiated and wired together.
"""

import pytest


class TestArchitectureImports:
    """Test that all modules can be imported correctly."""

    def test_main_package_import(self):
        """Test that the main package can be imported."""
        import audio_share_relay

        assert hasattr(audio_share_relay, "__version__")
        assert hasattr(audio_share_relay, "__author__")

    def test_core_imports(self):
        """Test core module imports."""
        from audio_share_relay.core import RelayEngine, RelayState, SessionLifecycleManager
        from audio_share_relay.core.relay_engine import RelayEngine as RelayEngineClass
        from audio_share_relay.core.relay_state import RelayState as RelayStateClass
        from audio_share_relay.core.session_manager import (
            SessionLifecycleManager as SessionLifecycleManagerClass,
        )

        assert RelayEngine == RelayEngineClass
        assert RelayState == RelayStateClass
        assert SessionLifecycleManager == SessionLifecycleManagerClass

    def test_websockets_imports(self):
        """Test websocket transport imports."""
        from audio_share_relay.websockets.core import ConnectionManager
        from audio_share_relay.websockets.server import AudioRelayServer
        from audio_share_relay.websockets.server.relay_server import (
            AudioRelayServer as AudioRelayServerClass,
        )

        assert AudioRelayServer == AudioRelayServerClass
        assert ConnectionManager is not None

    def test_config_imports(self):
        """Test configuration module imports."""
        from audio_share_relay.config import RelayConfig, RelayConfigManager
        from audio_share_relay.config.settings import RelayConfig as RelayConfigClass

        assert RelayConfig == RelayConfigClass
        assert RelayConfigManager is not None

    def test_infrastructure_imports(self):
        """Test infrastructure module imports."""
        from audio_share_relay.infrastructure import (
            RelayError,
            SessionNotFoundError,
            UnauthorizedOperationError,
            get_logger,
            setup_logging,
        )

        assert issubclass(SessionNotFoundError, RelayError)
        assert issubclass(UnauthorizedOperationError, RelayError)
        assert callable(setup_logging)
        assert callable(get_logger)


class TestArchitectureWiring:
    """Test that the server wires one shared state through its components."""

    @pytest.mark.unit
    def test_server_shares_state(self):
        from audio_share_relay.websockets.server import AudioRelayServer

        server = AudioRelayServer(host="127.0.0.1", port=0)

        assert server.sessions.state is server.state
        assert server.engine.state is server.state
        assert server.sessions.connections is server.connections
        assert server.engine.connections is server.connections

    @pytest.mark.unit
    def test_servers_are_isolated(self):
        from audio_share_relay.websockets.server import AudioRelayServer

        first = AudioRelayServer(host="127.0.0.1", port=0)
        second = AudioRelayServer(host="127.0.0.1", port=0)

        assert first.state is not second.state
        assert first.connections is not second.connections


class TestLogging:
    """Test environment-aware logging setup."""

    @pytest.mark.unit
    def test_environment_detection(self, monkeypatch):
        from audio_share_relay.infrastructure import Environment, LoggingManager

        monkeypatch.setenv("ENVIRONMENT", "prod")
        assert LoggingManager().get_environment() == Environment.PRODUCTION

        monkeypatch.setenv("ENVIRONMENT", "stage")
        assert LoggingManager().get_environment() == Environment.STAGING

        monkeypatch.delenv("ENVIRONMENT")
        assert LoggingManager().get_environment() == Environment.DEVELOPMENT

    @pytest.mark.unit
    def test_basic_logging_fallback(self, tmp_path):
        from audio_share_relay.infrastructure import LoggingManager

        manager = LoggingManager(config_path=tmp_path / "missing.yaml")
        log_file = tmp_path / "logs" / "relay.log"

        logger = manager.setup_logging("audio_share_relay.test", "INFO", str(log_file))
        logger.info("hello")

        assert logger.level == 20
        assert log_file.exists()
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    @pytest.mark.unit
    def test_get_logger_scopes_to_package(self):
        from audio_share_relay.infrastructure import get_logger

        assert get_logger("core.relay_engine").name == "audio_share_relay.core.relay_engine"
        assert get_logger("audio_share_relay.api").name == "audio_share_relay.api"

    @pytest.mark.unit
    def test_set_relay_log_level(self):
        import logging

        from audio_share_relay.infrastructure import set_relay_log_level

        package_logger = logging.getLogger("audio_share_relay")
        saved_level = package_logger.level
        try:
            set_relay_log_level("warning")
            assert package_logger.level == logging.WARNING
        finally:
            package_logger.setLevel(saved_level)
