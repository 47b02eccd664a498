"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for connections, transports, the
broadcast hub and the FastAPI application.
"""

import asyncio

import pytest

from tests.mocks.transport_mocks import RecordingTransport


@pytest.fixture
def registry():
    """
    Provides an empty ConnectionRegistry.

    Returns:
        ConnectionRegistry: Fresh registry instance
    """
    from chat_relay.managers.connection_registry import ConnectionRegistry

    return ConnectionRegistry()


@pytest.fixture
def transport():
    """
    Provides a transport that records every delivery.

    Returns:
        RecordingTransport: In-memory transport
    """
    return RecordingTransport()


@pytest.fixture
def hub(registry, transport):
    """
    Provides a BroadcastHub wired to the registry and recording transport.

    Args:
        registry: Fixture providing an empty registry
        transport: Fixture providing a recording transport

    Returns:
        BroadcastHub: Hub with a short send timeout
    """
    from chat_relay.managers.broadcast_hub import BroadcastHub

    return BroadcastHub(registry, transport, send_timeout=0.5)


@pytest.fixture
def clean_connection_registry():
    """
    Empties the application-wide registry before and after a test.

    Yields:
        ConnectionRegistry: The module-level registry singleton
    """
    from chat_relay.managers.connection_registry import connection_registry

    connection_registry._connections.clear()
    connection_registry._lock = asyncio.Lock()
    yield connection_registry
    connection_registry._connections.clear()


@pytest.fixture
def app(clean_connection_registry):
    """
    Create the FastAPI application with a clean registry.

    Returns:
        FastAPI: FastAPI application instance.
    """
    from chat_relay import application

    return application()


@pytest.fixture
def client(app):
    """
    Create a test client sharing one event loop for all WebSocket sessions.

    Args:
        app: FastAPI application fixture.

    Yields:
        TestClient: FastAPI test client instance.
    """
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client
