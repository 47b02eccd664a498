import uuid
from typing import Any

from chat_relay.types import ConnectionId


class Connection:
    """
    Handle for one live client session.

    The registry owns the handle for its lifetime; the transport owns the
    underlying socket and is the only one that reads ``websocket``.
    """

    __slots__ = ("connection_id", "websocket", "_open")

    def __init__(
        self, websocket: Any = None, connection_id: ConnectionId | None = None
    ) -> None:
        self.connection_id: ConnectionId = connection_id or new_connection_id()
        self.websocket = websocket
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    def close(self) -> None:
        """Mark the session as closed. Idempotent."""
        self._open = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Connection):
            return NotImplemented
        return self.connection_id == other.connection_id

    def __hash__(self) -> int:
        return hash(self.connection_id)

    def __repr__(self) -> str:
        state = "open" if self._open else "closed"
        return f"Connection({self.connection_id!r}, {state})"


def new_connection_id() -> ConnectionId:
    return ConnectionId(str(uuid.uuid4()))
