"""
Configuration management for the Audio Share Relay.

This package provides configuration loading from environment variables
and .env files, with validation and default values.
"""

from .settings import RelayConfig, RelayConfigManager

__all__ = [
    "RelayConfig",
    "RelayConfigManager",
]
