import asyncio
import time
from typing import Any, Awaitable, Coroutine, TypeVar

from chat_relay.exceptions import DuplicateConnectionError, SendFailure
from chat_relay.logging import logger
from chat_relay.managers.connection_registry import (
    ConnectionRegistry,
    connection_registry,
)
from chat_relay.managers.websocket_transport import websocket_transport
from chat_relay.protocols import Transport
from chat_relay.schemas.connection import Connection
from chat_relay.schemas.events import ChatMessage, PresenceEvent
from chat_relay.settings import app_settings
from chat_relay.utils.metrics import (
    ws_broadcast_duration_seconds,
    ws_connections_active,
    ws_connections_total,
    ws_messages_received_total,
    ws_messages_sent_total,
    ws_send_failures_total,
)

T = TypeVar("T")


class BroadcastHub:
    """
    Fans presence updates and chat messages out to every registered connection.

    Apart from the tasks described below, the hub holds no state of its own
    beyond the registry it depends on. Each broadcast works on a snapshot of
    the registry taken when it starts, makes exactly one delivery attempt per
    connection in that snapshot, and returns only after all attempts have
    finished. A failed or slow recipient is logged and skipped; it never
    aborts delivery to the others and never surfaces to the sender.

    A registry change and the presence update that announces it run in a
    task owned by the hub. Cancelling the session task that asked for the
    change (the server tears sessions down by cancellation) therefore never
    leaves the registry changed with the update unsent.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        transport: Transport,
        send_timeout: float | None = None,
    ) -> None:
        """
        Args:
            registry: Registry of active connections.
            transport: Capability used to deliver one event to one connection.
            send_timeout: Upper bound in seconds for a single delivery.
                Defaults to ``WS_SEND_TIMEOUT_SECONDS``.
        """
        self.registry = registry
        self.transport = transport
        self.send_timeout = (
            send_timeout
            if send_timeout is not None
            else app_settings.WS_SEND_TIMEOUT_SECONDS
        )
        self._pending: set[asyncio.Task] = set()

    def _run_to_completion(self, coro: Coroutine[Any, Any, T]) -> Awaitable[T]:
        """
        Run ``coro`` in its own task and shield it from the caller.

        The caller may be cancelled while awaiting the result; the task keeps
        running and is tracked until done so ``wait_pending`` can await it.
        """
        task = asyncio.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return asyncio.shield(task)

    async def wait_pending(self) -> None:
        """Wait for registry changes whose callers were cancelled."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def on_connect(self, connection: Connection) -> int:
        """
        Register a new connection and announce the new count to everyone.

        The newly joined connection is part of the presence broadcast.

        Returns:
            The number of registered connections after the insert.

        Raises:
            DuplicateConnectionError: The connection id is already registered.
                Nothing is broadcast in that case.
        """
        return await self._run_to_completion(self._connect(connection))

    async def _connect(self, connection: Connection) -> int:
        try:
            count = await self.registry.add(connection)
        except DuplicateConnectionError as ex:
            logger.error(f"Rejected connection: {ex}")
            ws_connections_total.labels(status="rejected_duplicate").inc()
            raise

        ws_connections_total.labels(status="accepted").inc()
        ws_connections_active.set(count)
        logger.info(f"Connection established! Number of users: {count}")

        await self.broadcast(PresenceEvent(count=count))
        return count

    async def on_disconnect(self, connection: Connection) -> bool:
        """
        Unregister a connection and announce the new count to the rest.

        Calling this for a connection that is not registered (never added, or
        already removed) does nothing and broadcasts nothing.

        Returns:
            True if the connection was registered and has been removed.
        """
        # A connect still in flight for this handle now fails to register it
        connection.close()
        return await self._run_to_completion(self._disconnect(connection))

    async def _disconnect(self, connection: Connection) -> bool:
        removed, count = await self.registry.discard(connection)
        if not removed:
            logger.debug(
                f"Ignoring disconnect of unregistered connection "
                f"{connection.connection_id}"
            )
            return False

        ws_connections_active.set(count)
        logger.info(f"Client disconnected! Number of users: {count}")

        await self.broadcast(PresenceEvent(count=count))
        return True

    async def on_message(self, connection: Connection, payload: str) -> int:
        """
        Relay a chat payload, unchanged, to every connection including the sender.

        Returns:
            Number of connections the message was delivered to.
        """
        ws_messages_received_total.inc()
        logger.debug(
            f"Message from {connection.connection_id}: {payload!r}"
        )
        return await self.broadcast(ChatMessage(payload=payload))

    async def broadcast(self, event: PresenceEvent | ChatMessage) -> int:
        """
        Deliver one event to every connection in a snapshot of the registry.

        Sends run concurrently, each bounded by ``send_timeout``.

        Args:
            event: The presence update or chat message to deliver.

        Returns:
            Number of connections that received the event.
        """
        snapshot = await self.registry.snapshot()
        if not snapshot:
            return 0

        start_time = time.perf_counter()
        results = await asyncio.gather(
            *[
                self._safe_send(connection, event.event, event.data)
                for connection in snapshot
            ]
        )
        ws_broadcast_duration_seconds.labels(event=event.event).observe(
            time.perf_counter() - start_time
        )

        delivered = sum(results)
        if delivered < len(snapshot):
            logger.warning(
                f"Broadcast of '{event.event}' reached {delivered} of "
                f"{len(snapshot)} connections"
            )
        return delivered

    async def _safe_send(
        self, connection: Connection, event: str, data: int | str
    ) -> bool:
        """
        Attempt a single delivery, isolating any failure.

        Returns:
            True on success, False if the send raised or timed out.
        """
        try:
            await asyncio.wait_for(
                self.transport.send(connection, event, data),
                timeout=self.send_timeout,
            )
        except Exception as ex:
            # Transport errors, closed sockets and timeouts alike
            failure = SendFailure(connection.connection_id, event, ex)
            logger.warning(str(failure))
            ws_send_failures_total.labels(event=event).inc()
            return False

        ws_messages_sent_total.labels(event=event).inc()
        return True


broadcast_hub = BroadcastHub(connection_registry, websocket_transport)
