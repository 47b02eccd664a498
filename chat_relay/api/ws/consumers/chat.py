import json

from fastapi import APIRouter
from pydantic import ValidationError
from starlette.websockets import WebSocket

from chat_relay.api.ws.websocket import ChatWebSocketEndpoint
from chat_relay.constants import CHAT_EVENT, WS_UNSUPPORTED_DATA_CODE
from chat_relay.logging import logger
from chat_relay.schemas.events import ChatMessage, InboundEnvelope
from chat_relay.settings import app_settings

router = APIRouter()


@router.websocket_route(app_settings.WS_PATH)
class Chat(ChatWebSocketEndpoint):
    """
    WebSocket endpoint for the chat room.

    Every ``chat`` frame is relayed unchanged to all connected clients,
    the sender included. Frames with other event names are ignored.
    """

    async def on_receive(self, websocket: WebSocket, data: str) -> None:
        """
        Parses an inbound frame and relays chat text through the hub.

        Frames that are not a JSON envelope, or ``chat`` frames whose data is
        not a string, close the connection with ``1003``. Any string is
        relayed, including one that ends in half of a surrogate pair.

        Args:
            websocket: The WebSocket connection instance
            data: The raw text frame
        """
        try:
            envelope = InboundEnvelope.model_validate(json.loads(data))
            if envelope.event != CHAT_EVENT:
                logger.debug(f"Ignoring '{envelope.event}' event")
                return
            message = ChatMessage(payload=envelope.data)
        except (json.JSONDecodeError, ValidationError):
            logger.debug(
                f"Received invalid data: {data!r} from "
                f"{self.connection.connection_id}"
            )
            await websocket.close(code=WS_UNSUPPORTED_DATA_CODE)
            return

        await self.hub.on_message(self.connection, message.payload)
