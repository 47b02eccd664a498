import asyncio

from chat_relay.exceptions import DuplicateConnectionError
from chat_relay.logging import logger
from chat_relay.schemas.connection import Connection
from chat_relay.types import ConnectionId


class ConnectionRegistry:
    """
    Registry of active chat connections.

    Tracks connections by id for O(1) lookups. Every read and write goes
    through a single ``asyncio.Lock`` so the count always equals the number
    of registered connections, whatever the interleaving of connects and
    disconnects.
    """

    def __init__(self) -> None:
        self._connections: dict[ConnectionId, Connection] = {}
        self._lock = asyncio.Lock()

    async def add(self, connection: Connection) -> int:
        """
        Register a connection.

        Args:
            connection: The connection to register. Must be open.

        Returns:
            The number of registered connections after the insert.

        Raises:
            DuplicateConnectionError: The connection id is already registered.
            ValueError: The connection has already been closed.
        """
        if not connection.is_open:
            raise ValueError(
                f"Cannot register closed connection {connection.connection_id}"
            )

        async with self._lock:
            if connection.connection_id in self._connections:
                raise DuplicateConnectionError(connection.connection_id)
            self._connections[connection.connection_id] = connection
            count = len(self._connections)

        logger.debug(
            f"Connection {connection.connection_id} added to registry "
            f"({count} total)"
        )
        return count

    async def remove(self, connection: Connection) -> int:
        """
        Unregister a connection.

        Removing a connection that is not registered is a no-op, so repeated
        disconnect notifications are harmless.

        Returns:
            The number of registered connections after the removal.
        """
        _, count = await self.discard(connection)
        return count

    async def discard(self, connection: Connection) -> tuple[bool, int]:
        """
        Unregister a connection and report whether it was registered.

        Only this very handle is removed: another connection registered under
        the same id is left alone.

        Returns:
            Tuple of (removed, count) where ``removed`` is False when the
            connection was already absent.
        """
        async with self._lock:
            removed = (
                self._connections.get(connection.connection_id) is connection
            )
            if removed:
                del self._connections[connection.connection_id]
            count = len(self._connections)

        if removed:
            logger.debug(
                f"Connection {connection.connection_id} removed from registry "
                f"({count} total)"
            )
        return removed, count

    async def count(self) -> int:
        async with self._lock:
            return len(self._connections)

    async def contains(self, connection_id: ConnectionId) -> bool:
        async with self._lock:
            return connection_id in self._connections

    async def snapshot(self) -> list[Connection]:
        """
        Consistent copy of the registered connections.

        Broadcasts iterate the copy, so connections joining or leaving while
        a broadcast is in flight never invalidate the iteration.
        """
        async with self._lock:
            return list(self._connections.values())


connection_registry = ConnectionRegistry()
