"""
Fake transports for broadcast hub testing.

Each fake satisfies the ``Transport`` protocol and records what it was asked
to deliver, so tests can assert on fan-out without a network stack.
"""

import asyncio
from typing import Any

from chat_relay.schemas.connection import Connection
from chat_relay.types import ConnectionId


class RecordingTransport:
    """Records every delivery as ``(connection_id, event, data)``."""

    def __init__(self) -> None:
        self.sent: list[tuple[ConnectionId, str, Any]] = []

    async def send(self, connection: Connection, event: str, data: Any) -> None:
        self.sent.append((connection.connection_id, event, data))

    def received_by(self, connection: Connection) -> list[tuple[str, Any]]:
        """Events delivered to one connection, in delivery order."""
        return [
            (event, data)
            for connection_id, event, data in self.sent
            if connection_id == connection.connection_id
        ]

    def recipients_of(self, event: str, data: Any) -> list[ConnectionId]:
        return [
            connection_id
            for connection_id, sent_event, sent_data in self.sent
            if sent_event == event and sent_data == data
        ]


class FailingTransport(RecordingTransport):
    """
    Raises for selected connections and records everything else.

    Args:
        failing: Connection ids whose deliveries raise.
        error: Exception raised for failing connections.
    """

    def __init__(
        self,
        failing: set[ConnectionId],
        error: Exception | None = None,
    ) -> None:
        super().__init__()
        self.failing = failing
        self.error = error or ConnectionError("Connection reset by peer")
        self.attempts: list[ConnectionId] = []

    async def send(self, connection: Connection, event: str, data: Any) -> None:
        self.attempts.append(connection.connection_id)
        if connection.connection_id in self.failing:
            raise self.error
        await super().send(connection, event, data)


class StallingTransport(RecordingTransport):
    """Never completes delivery to selected connections."""

    def __init__(self, stalled: set[ConnectionId]) -> None:
        super().__init__()
        self.stalled = stalled

    async def send(self, connection: Connection, event: str, data: Any) -> None:
        if connection.connection_id in self.stalled:
            await asyncio.Event().wait()
        await super().send(connection, event, data)


class GatedTransport(RecordingTransport):
    """
    Holds every delivery until ``gate`` is set.

    ``started`` is set once the first delivery is waiting at the gate.
    """

    def __init__(self) -> None:
        super().__init__()
        self.gate = asyncio.Event()
        self.started = asyncio.Event()

    async def send(self, connection: Connection, event: str, data: Any) -> None:
        self.started.set()
        await self.gate.wait()
        await super().send(connection, event, data)


class ChurnTransport(FailingTransport):
    """
    Changes the registry from inside the first delivery of a broadcast.

    Args:
        registry: Registry the broadcast was snapshotted from.
        joining: Connection added during the first delivery.
        leaving: Connection removed during the first delivery.
    """

    def __init__(self, registry, joining: Connection, leaving: Connection) -> None:
        super().__init__(failing=set())
        self.registry = registry
        self.joining = joining
        self.leaving = leaving
        self.churned = False

    async def send(self, connection: Connection, event: str, data: Any) -> None:
        if not self.churned:
            self.churned = True
            await self.registry.add(self.joining)
            await self.registry.remove(self.leaving)
        await super().send(connection, event, data)
