from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from chat_relay.constants import MESSAGE_EVENT, USERS_EVENT
from chat_relay.types import EventName


class PresenceEvent(BaseModel):  # type: ignore[misc]
    """Current number of registered connections, sent as ``users``."""

    model_config = ConfigDict(frozen=True)

    event: ClassVar[EventName] = USERS_EVENT

    count: Annotated[int, Field(ge=0)]

    @property
    def data(self) -> int:
        return self.count


class ChatMessage(BaseModel):  # type: ignore[misc]
    """
    Raw chat text relayed to every connection as ``message``.

    The payload is carried unchanged: no trimming, no content validation and
    no size limit.
    """

    model_config = ConfigDict(frozen=True)

    event: ClassVar[EventName] = MESSAGE_EVENT

    payload: str

    @property
    def data(self) -> str:
        return self.payload


class InboundEnvelope(BaseModel):  # type: ignore[misc]
    """Frame received from a client: ``{"event": ..., "data": ...}``."""

    event: str
    data: Any = None

