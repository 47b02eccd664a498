import json
from typing import Any

from starlette.websockets import WebSocketState

from chat_relay.schemas.connection import Connection


class WebSocketTransport:
    """
    Delivers events to clients over their Starlette WebSocket.

    Each event is framed as a JSON envelope ``{"event": ..., "data": ...}``.
    Non-ASCII text is written as ``\\u`` escapes so any chat payload, lone
    surrogates included, can be encoded for the wire.
    """

    async def send(self, connection: Connection, event: str, data: Any) -> None:
        """
        Send one event to one connection.

        Args:
            connection: Recipient connection handle.
            event: Event name.
            data: Event data.

        Raises:
            ConnectionError: The connection or its socket is already closed.
            WebSocketDisconnect, RuntimeError: Raised by Starlette when the
                peer goes away mid-send.
        """
        websocket = connection.websocket
        if not connection.is_open or websocket is None:
            raise ConnectionError(
                f"Connection {connection.connection_id} is closed"
            )
        if websocket.application_state == WebSocketState.DISCONNECTED:
            raise ConnectionError(
                f"WebSocket of connection {connection.connection_id} is closed"
            )

        await websocket.send_text(
            json.dumps({"event": event, "data": data}, ensure_ascii=True)
        )


websocket_transport = WebSocketTransport()
