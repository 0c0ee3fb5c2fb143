"""
Audio Share Relay - real-time session relay for sharing live audio on a LAN.

One host device streams audio to any number of listener devices. The relay
keeps track of sessions and their members and forwards audio and control
messages from each host to its listeners over WebSockets.

Architecture:
- Core: Session state, session lifecycle and audio relay logic
- WebSockets: Relay server, message handlers, connection/room registry
- API: Read-only HTTP health and statistics endpoints
- Config: Configuration management
- Infrastructure: Logging and exceptions
"""

__version__ = "1.0.0"
__author__ = "Audio Share Relay Team"

# Core components
from .core import (
    Member,
    Session,
    RelayState,
    SessionLifecycleManager,
    RelayEngine,
)

# Networking components
from .websockets.core import ConnectionManager
from .websockets.server import AudioRelayServer

# Configuration
from .config import RelayConfig, RelayConfigManager

# Infrastructure
from .infrastructure.logging import setup_logging, get_logger
from .infrastructure.exceptions import (
    RelayError,
    ConfigurationError,
    MessageValidationError,
    SessionNotFoundError,
    UnauthorizedOperationError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Core components
    "Member",
    "Session",
    "RelayState",
    "SessionLifecycleManager",
    "RelayEngine",
    # Networking components
    "ConnectionManager",
    "AudioRelayServer",
    # Configuration
    "RelayConfig",
    "RelayConfigManager",
    # Infrastructure
    "setup_logging",
    "get_logger",
    "RelayError",
    "ConfigurationError",
    "MessageValidationError",
    "SessionNotFoundError",
    "UnauthorizedOperationError",
]
