"""
Mock factory functions for WebSocket testing.

Provides mocks for WebSocket connections, connection handles and the
broadcast hub.
"""

from unittest.mock import AsyncMock, MagicMock


def create_mock_websocket():
    """
    Creates a mock WebSocket connection with common methods.

    Returns:
        MagicMock: Mocked WebSocket instance in the connected state
    """
    from fastapi import WebSocket
    from starlette.websockets import WebSocketState

    ws_mock = MagicMock(spec=WebSocket)

    # Send operations
    ws_mock.send_json = AsyncMock()
    ws_mock.send_text = AsyncMock()

    # Receive operations
    ws_mock.receive = AsyncMock()
    ws_mock.receive_text = AsyncMock(return_value="")

    # Connection lifecycle
    ws_mock.accept = AsyncMock()
    ws_mock.close = AsyncMock()

    # State and headers
    ws_mock.client_state = WebSocketState.CONNECTED
    ws_mock.application_state = WebSocketState.CONNECTED
    ws_mock.headers = {}
    ws_mock.query_params = {}

    return ws_mock


def create_mock_connection(connection_id: str | None = None):
    """
    Creates a Connection handle wrapping a mock WebSocket.

    Args:
        connection_id: Optional fixed id, a fresh UUID otherwise

    Returns:
        Connection: Open connection handle
    """
    from chat_relay.schemas.connection import Connection
    from chat_relay.types import ConnectionId

    return Connection(
        create_mock_websocket(),
        ConnectionId(connection_id) if connection_id else None,
    )


def create_mock_broadcast_hub():
    """
    Creates a mock BroadcastHub instance.

    Returns:
        MagicMock: Mocked BroadcastHub instance
    """
    from chat_relay.managers.broadcast_hub import BroadcastHub

    hub_mock = MagicMock(spec=BroadcastHub)
    hub_mock.on_connect = AsyncMock(return_value=1)
    hub_mock.on_disconnect = AsyncMock(return_value=True)
    hub_mock.on_message = AsyncMock(return_value=1)
    hub_mock.broadcast = AsyncMock(return_value=1)

    return hub_mock
