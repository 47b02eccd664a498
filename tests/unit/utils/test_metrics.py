"""Tests for Prometheus metric registration helpers."""

from prometheus_client import Counter, Gauge, Histogram

from chat_relay.utils.metrics import ws_broadcast_duration_seconds
from chat_relay.utils.metrics._helpers import (
    _get_or_create_counter,
    _get_or_create_gauge,
    _get_or_create_histogram,
)


def test_reregistering_returns_existing_collector():
    counter = _get_or_create_counter("test_relay_events_total", "Events", ["event"])

    assert isinstance(counter, Counter)
    assert _get_or_create_counter("test_relay_events_total", "Events") is counter


def test_gauge_without_labels():
    gauge = _get_or_create_gauge("test_relay_connections", "Connections")

    gauge.set(4)

    assert isinstance(gauge, Gauge)
    assert _get_or_create_gauge("test_relay_connections", "Connections") is gauge


def test_histogram_keeps_custom_buckets():
    histogram = _get_or_create_histogram(
        "test_relay_duration_seconds", "Duration", buckets=(0.1, 1.0)
    )

    bounds = [
        sample.labels["le"]
        for sample in histogram.collect()[0].samples
        if sample.name.endswith("_bucket")
    ]

    assert isinstance(histogram, Histogram)
    assert bounds == ["0.1", "1.0", "+Inf"]


def test_broadcast_duration_is_reused_on_reimport():
    assert (
        _get_or_create_histogram(
            "ws_broadcast_duration_seconds", "duplicate", ["event"]
        )
        is ws_broadcast_duration_seconds
    )
