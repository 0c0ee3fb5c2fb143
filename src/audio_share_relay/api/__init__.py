"""
REST API module for the Audio Share Relay.

This module provides read-only health and statistics endpoints.
"""

from .app import create_app

__all__ = ["create_app"]
