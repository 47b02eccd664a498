"""
Protocol classes for structural subtyping (duck typing with type safety).

Protocols define interfaces without requiring explicit inheritance. The
broadcast hub depends on ``Transport`` only, so it runs against the real
WebSocket transport in production and against an in-memory fake in tests.

Example:
    ```python
    from chat_relay.protocols import Transport


    class RecordingTransport:
        def __init__(self):
            self.sent = []

        async def send(self, connection, event, data):
            self.sent.append((connection.connection_id, event, data))


    assert isinstance(RecordingTransport(), Transport)
    ```
"""

from typing import Any, Protocol, runtime_checkable

from chat_relay.schemas.connection import Connection


@runtime_checkable
class Transport(Protocol):
    """
    Protocol for delivering one event to one connection.

    Implementations raise on failure; the caller decides how failures are
    isolated.
    """

    async def send(self, connection: Connection, event: str, data: Any) -> None:
        """
        Deliver a single event to a single connection.

        Args:
            connection: Recipient connection handle.
            event: Event name (``"users"`` or ``"message"``).
            data: Event data (integer count or chat text).
        """
        ...
