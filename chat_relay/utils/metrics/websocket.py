"""
Prometheus metrics for WebSocket connection monitoring.

This module defines metrics for tracking chat connections, inbound chat
messages, per-recipient deliveries and broadcast durations.
"""

from chat_relay.utils.metrics._helpers import (
    _get_or_create_counter,
    _get_or_create_gauge,
    _get_or_create_histogram,
)

# WebSocket Connection Metrics
ws_connections_active = _get_or_create_gauge(
    "ws_connections_active", "Number of registered WebSocket connections"
)

ws_connections_total = _get_or_create_counter(
    "ws_connections_total",
    "Total WebSocket connections",
    ["status"],  # accepted, rejected_duplicate
)

# Message Metrics
ws_messages_received_total = _get_or_create_counter(
    "ws_messages_received_total", "Total chat messages received from clients"
)

ws_messages_sent_total = _get_or_create_counter(
    "ws_messages_sent_total",
    "Total events delivered to individual connections",
    ["event"],
)

ws_send_failures_total = _get_or_create_counter(
    "ws_send_failures_total",
    "Total failed or timed out deliveries to individual connections",
    ["event"],
)

ws_broadcast_duration_seconds = _get_or_create_histogram(
    "ws_broadcast_duration_seconds",
    "Time to fan one event out to every connection in the snapshot",
    ["event"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)


__all__ = [
    "ws_connections_active",
    "ws_connections_total",
    "ws_messages_received_total",
    "ws_messages_sent_total",
    "ws_send_failures_total",
    "ws_broadcast_duration_seconds",
]
