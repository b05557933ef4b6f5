"""Observability – in-process counters and histograms with Prometheus exposition."""
from mp_metrics.observability.metrics.exposition import (
    CONTENT_TYPE_LATEST,
    MetricFamily,
    format_value,
    render,
)
from mp_metrics.observability.metrics.instrumentation import (
    HTTP_REQUEST_DURATION_SECONDS,
    HTTP_REQUESTS_TOTAL,
    HttpInstrumentation,
)
from mp_metrics.observability.metrics.labels import EMPTY_KEY, canonical_key, canonical_labels
from mp_metrics.observability.metrics.paths import ID_PLACEHOLDER, normalize_path
from mp_metrics.observability.metrics.ports import (
    DEFAULT_BUCKETS,
    Counter,
    Histogram,
    MetricDefinition,
    Metrics,
    MetricType,
)
from mp_metrics.observability.metrics.registry import MetricsRegistry
from mp_metrics.observability.metrics.series import (
    CounterSample,
    CounterSeries,
    HistogramSample,
    HistogramSeries,
)

__all__ = [
    "CONTENT_TYPE_LATEST",
    "Counter",
    "CounterSample",
    "CounterSeries",
    "DEFAULT_BUCKETS",
    "EMPTY_KEY",
    "HTTP_REQUESTS_TOTAL",
    "HTTP_REQUEST_DURATION_SECONDS",
    "Histogram",
    "HistogramSample",
    "HistogramSeries",
    "HttpInstrumentation",
    "ID_PLACEHOLDER",
    "MetricDefinition",
    "MetricFamily",
    "MetricType",
    "Metrics",
    "MetricsRegistry",
    "canonical_key",
    "canonical_labels",
    "format_value",
    "normalize_path",
    "render",
]
