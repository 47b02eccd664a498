"""
Centralized mock objects for testing.

This package provides reusable mock factories and fake transports for the
registry, hub and WebSocket endpoint tests.
"""
