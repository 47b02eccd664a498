"""
Prometheus metrics for the chat relay.

Example:
    ```python
    from chat_relay.utils.metrics import ws_connections_active

    ws_connections_active.set(3)
    ```
"""

from chat_relay.utils.metrics.websocket import (
    ws_broadcast_duration_seconds,
    ws_connections_active,
    ws_connections_total,
    ws_messages_received_total,
    ws_messages_sent_total,
    ws_send_failures_total,
)

__all__ = [
    "ws_connections_active",
    "ws_connections_total",
    "ws_messages_received_total",
    "ws_messages_sent_total",
    "ws_send_failures_total",
    "ws_broadcast_duration_seconds",
]
