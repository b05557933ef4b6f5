"""Observability – HTTP request instrumentation.

Framework-agnostic half of the HTTP adapter: it owns the two standard HTTP
metrics and turns one completed request into registry updates. The
FastAPI middleware in :mod:`mp_metrics.adapters.fastapi` is a thin shell
around it.
"""
from __future__ import annotations

from typing import Iterable

from mp_metrics.kernel.errors import MetricsError
from mp_metrics.observability.logging import get_logger
from mp_metrics.observability.metrics.paths import normalize_path
from mp_metrics.observability.metrics.ports import DEFAULT_BUCKETS
from mp_metrics.observability.metrics.registry import MetricsRegistry

HTTP_REQUESTS_TOTAL = "http_requests_total"
HTTP_REQUEST_DURATION_SECONDS = "http_request_duration_seconds"

_log = get_logger(__name__)


class HttpInstrumentation:
    """Record ``http_requests_total`` and ``http_request_duration_seconds``.

    Both metrics are labelled ``method``, ``path`` (normalised) and
    ``status``. Registration happens in the constructor, so building two
    instrumentations on one registry is fine as long as the buckets agree.
    """

    def __init__(
        self,
        registry: MetricsRegistry,
        buckets: Iterable[float] | None = None,
        *,
        include_help: bool = False,
    ) -> None:
        self.registry = registry
        self.include_help = include_help
        self._requests = registry.counter(
            HTTP_REQUESTS_TOTAL,
            "Total number of HTTP requests",
        )
        self._latency = registry.histogram(
            HTTP_REQUEST_DURATION_SECONDS,
            "HTTP request duration in seconds",
            tuple(buckets) if buckets is not None else DEFAULT_BUCKETS,
        )

    def record(self, method: str, path: str, status: int | str, elapsed_seconds: float) -> None:
        """Account for one completed request.

        Instrumentation must never break the request it observes, so a
        :class:`MetricsError` is logged and dropped here.
        """
        labels = {
            "method": method,
            "path": normalize_path(path),
            "status": str(status),
        }
        try:
            self._requests.add(1.0, labels)
            self._latency.record(elapsed_seconds, labels)
        except MetricsError as exc:
            _log.warning(
                "metrics.instrumentation_failed",
                error_code=exc.code,
                error=exc.message,
                **labels,
            )

    def render(self) -> str:
        return self.registry.export(include_help=self.include_help)


__all__ = ["HTTP_REQUESTS_TOTAL", "HTTP_REQUEST_DURATION_SECONDS", "HttpInstrumentation"]
