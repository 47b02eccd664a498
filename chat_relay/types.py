"""
Type definitions and aliases for improved type safety.

Example:
    ```python
    from chat_relay.types import ConnectionId


    def lookup(connection_id: ConnectionId) -> Connection | None:
        # Type checker ensures only ConnectionId is passed, not raw str
        ...
    ```
"""

from typing import Literal, NewType

ConnectionId = NewType("ConnectionId", str)
"""Type-safe connection identifier (UUID4 string assigned at accept time)."""

EventName = Literal["users", "message"]
"""Outbound event names delivered to clients."""
