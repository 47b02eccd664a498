"""
Custom exception classes for the chat relay.

This module defines the errors raised by the connection registry and the
broadcast hub. None of them is fatal: the hub logs and isolates them so a
failure local to one connection never affects the others.
"""

from chat_relay.types import ConnectionId


class ChatRelayError(Exception):
    """Base class for all chat relay errors."""

    pass


class DuplicateConnectionError(ChatRelayError):
    """
    Connection already registered.

    Raised by the registry when a connection id is added twice. Under correct
    transport behavior this never happens.
    """

    def __init__(self, connection_id: ConnectionId):
        self.connection_id = connection_id
        super().__init__(f"Connection {connection_id} is already registered")


class SendFailure(ChatRelayError):
    """
    Delivery of one event to one connection failed.

    Wraps the transport error (or timeout) that occurred while sending. The
    hub logs it and carries on with the remaining recipients.
    """

    def __init__(
        self, connection_id: ConnectionId, event: str, cause: BaseException
    ):
        self.connection_id = connection_id
        self.event = event
        self.cause = cause
        super().__init__(
            f"Failed to send '{event}' to connection {connection_id}: "
            f"{type(cause).__name__}: {cause}"
        )
