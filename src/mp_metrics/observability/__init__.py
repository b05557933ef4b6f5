"""Observability – structured logging and metrics."""

from mp_metrics.observability.logging import JsonLoggerFactory, get_logger
from mp_metrics.observability.metrics import HttpInstrumentation, MetricsRegistry, normalize_path

__all__ = [
    "HttpInstrumentation",
    "JsonLoggerFactory",
    "MetricsRegistry",
    "get_logger",
    "normalize_path",
]
