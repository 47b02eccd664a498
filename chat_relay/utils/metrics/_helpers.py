"""
Helper functions for Prometheus metric registration.

Metrics are module-level singletons; re-importing a module (uvicorn
--reload, test collection) would otherwise raise a duplicate registration
error, so existing collectors are looked up in the registry instead.
"""

from typing import Any, TypeVar

from prometheus_client import REGISTRY, Counter, Gauge, Histogram

M = TypeVar("M", Counter, Gauge, Histogram)


def _get_or_create(
    metric_cls: type[M],
    name: str,
    doc: str,
    labels: list[str] | None = None,
    **kwargs: Any,
) -> M:
    """
    Register a metric, or return the collector already registered as ``name``.

    Args:
        metric_cls: ``Counter``, ``Gauge`` or ``Histogram``.
        name: Metric name.
        doc: Metric documentation.
        labels: Optional list of label names.
        **kwargs: Extra constructor arguments, e.g. histogram buckets.
    """
    try:
        return metric_cls(name, doc, labels or [], **kwargs)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


def _get_or_create_counter(
    name: str, doc: str, labels: list[str] | None = None
) -> Counter:
    return _get_or_create(Counter, name, doc, labels)


def _get_or_create_gauge(
    name: str, doc: str, labels: list[str] | None = None
) -> Gauge:
    return _get_or_create(Gauge, name, doc, labels)


def _get_or_create_histogram(
    name: str,
    doc: str,
    labels: list[str] | None = None,
    buckets: tuple[float, ...] | None = None,
) -> Histogram:
    if buckets:
        return _get_or_create(Histogram, name, doc, labels, buckets=buckets)
    return _get_or_create(Histogram, name, doc, labels)
