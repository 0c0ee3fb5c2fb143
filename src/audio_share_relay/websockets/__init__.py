"""
WebSocket transport for the Audio Share Relay.

This package contains the relay server, its message handlers and the
connection/room registry used to address outbound messages.
"""
