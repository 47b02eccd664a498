from typing import Any

from starlette import status
from starlette.endpoints import WebSocketEndpoint
from starlette.websockets import WebSocket, WebSocketState

from chat_relay.constants import WS_INTERNAL_ERROR_CODE
from chat_relay.exceptions import DuplicateConnectionError
from chat_relay.logging import clear_log_context, logger, set_log_context
from chat_relay.managers.broadcast_hub import BroadcastHub, broadcast_hub
from chat_relay.schemas.connection import Connection


class ChatWebSocketEndpoint(WebSocketEndpoint):  # type: ignore[misc]
    """
    WebSocket endpoint bound to the broadcast hub.

    Maps the lifecycle of one WebSocket session onto the hub: accept
    registers the connection, the end of the session (clean close, abrupt
    network loss, an error while receiving or cancellation by the server)
    unregisters it exactly once.
    """

    encoding = "text"
    hub: BroadcastHub = broadcast_hub

    async def dispatch(self) -> None:
        """
        Run one WebSocket session from accept to disconnect.

        The loop stops on a disconnect message or once the server side has
        closed the socket. ``on_connect`` runs inside the same ``try`` as the
        receive loop, so a session cancelled while it is being registered is
        still torn down by ``on_disconnect``.
        """
        websocket = WebSocket(self.scope, receive=self.receive, send=self.send)

        close_code = status.WS_1000_NORMAL_CLOSURE

        try:
            await self.on_connect(websocket)
            while websocket.application_state == WebSocketState.CONNECTED:
                message = await websocket.receive()
                if message["type"] == "websocket.receive":
                    data = await self.decode(websocket, message)
                    await self.on_receive(websocket, data)
                elif message["type"] == "websocket.disconnect":
                    close_code = int(
                        message.get("code") or status.WS_1000_NORMAL_CLOSURE
                    )
                    break
        except Exception as exc:
            close_code = status.WS_1011_INTERNAL_ERROR
            raise exc
        finally:
            await self.on_disconnect(websocket, close_code)

    async def on_connect(self, websocket: WebSocket) -> None:
        """
        Accepts the socket and registers its connection with the hub.

        A connection that cannot be registered is closed straight away with
        ``1011`` and is never unregistered later.
        """
        self.connection = Connection(websocket)
        self.registered = False
        set_log_context(connection_id=self.connection.connection_id)

        await websocket.accept()

        # Set before the hub call so teardown runs even if this is cancelled
        self.registered = True
        try:
            await self.hub.on_connect(self.connection)
        except DuplicateConnectionError:
            self.registered = False
            await websocket.close(code=WS_INTERNAL_ERROR_CODE)
            return

        logger.debug(
            f"Client connected to websocket "
            f"(connection_id: {self.connection.connection_id})"
        )

    async def on_receive(self, websocket: WebSocket, data: Any) -> None:
        raise NotImplementedError

    async def on_disconnect(self, websocket: WebSocket, close_code: int) -> None:
        """
        Unregisters the connection and announces the new count.
        """
        try:
            if self.registered:
                self.registered = False
                await self.hub.on_disconnect(self.connection)
        finally:
            logger.debug(
                f"Client {self.connection.connection_id} disconnected "
                f"with code {close_code}"
            )
            clear_log_context()
