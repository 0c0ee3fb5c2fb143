"""
Test suite for the Audio Share Relay.

This package contains comprehensive tests organized by type:
- Unit tests for individual components
- Integration tests for component interactions
- End-to-end tests for full workflows
- Test fixtures and utilities
"""
