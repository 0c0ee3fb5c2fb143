#!/usr/bin/env python3
"""
WebSocket Relay Server for Audio Share Relay.

This script starts the relay server that coordinates audio sharing sessions
between a host device and its listeners, plus the status API if enabled.
"""

import sys
from pathlib import Path

# Add src directory to Python path
src_path = Path(__file__).parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from audio_share_relay.websockets.server.relay_server import run

if __name__ == "__main__":
    run()
