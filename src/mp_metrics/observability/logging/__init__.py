"""Observability – structured logging (structlog)."""
from mp_metrics.observability.logging.factory import JsonLoggerFactory
from mp_metrics.observability.logging.loggers import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
