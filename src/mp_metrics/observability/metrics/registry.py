"""Observability – MetricsRegistry.

The registry owns metric definitions and the state of every series.

Locking:

* ``MetricsRegistry._lock`` guards the definition table and insertion of
  new series. It is held only for dictionary bookkeeping.
* Each series carries its own lock for value updates, so unrelated series
  never contend.

A series is created on first use with double-checked lookup, so
concurrent first use of one label set still yields exactly one series.
"""
from __future__ import annotations

import re
import threading
from typing import Iterable, Union

from mp_metrics.kernel.errors import (
    DefinitionConflictError,
    InvalidDeltaError,
    InvalidLabelError,
    InvalidMetricNameError,
    UnknownMetricError,
)
from mp_metrics.observability.logging import get_logger
from mp_metrics.observability.metrics.exposition import MetricFamily, render
from mp_metrics.observability.metrics.labels import LabelPairs, canonical_labels, format_pairs
from mp_metrics.observability.metrics.ports import (
    DEFAULT_BUCKETS,
    Counter,
    Histogram,
    Labels,
    MetricDefinition,
    Metrics,
    MetricType,
)
from mp_metrics.observability.metrics.series import (
    CounterSeries,
    HistogramSample,
    HistogramSeries,
    validate_boundaries,
)

_METRIC_NAME = re.compile(r"[a-zA-Z_:][a-zA-Z0-9_:]*")
_LABEL_NAME = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")

Series = Union[CounterSeries, HistogramSeries]

_log = get_logger(__name__)


class _RegistryCounter(Counter):
    def __init__(self, registry: "MetricsRegistry", name: str) -> None:
        self._registry = registry
        self.name = name

    def add(self, value: float = 1.0, labels: Labels | None = None) -> None:
        self._registry.increment(self.name, labels, value)


class _RegistryHistogram(Histogram):
    def __init__(self, registry: "MetricsRegistry", name: str) -> None:
        self._registry = registry
        self.name = name

    def record(self, value: float, labels: Labels | None = None) -> None:
        self._registry.observe(self.name, labels, value)


class MetricsRegistry(Metrics):
    """In-process registry of counters and histograms.

    Metrics must be registered before use::

        registry = MetricsRegistry()
        registry.register_counter("orders_created_total", "Orders created")
        registry.increment("orders_created_total", {"channel": "web"})
        body = registry.export()

    Registries are plain objects; create one per application (or per test)
    and pass it to whatever needs it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._definitions: dict[str, MetricDefinition] = {}
        self._series: dict[str, dict[str, Series]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_counter(self, name: str, help: str = "") -> MetricDefinition:  # noqa: A002
        """Define counter *name*; re-registering an identical counter is a no-op."""
        _check_name(name)
        return self._register(MetricDefinition(name, MetricType.COUNTER, help))

    def register_histogram(
        self,
        name: str,
        help: str = "",  # noqa: A002
        boundaries: Iterable[float] | None = None,
    ) -> MetricDefinition:
        """Define histogram *name* with *boundaries* (default :data:`DEFAULT_BUCKETS`).

        Raises
        ------
        InvalidBoundariesError
            Empty, non-finite or not strictly ascending boundaries.
        DefinitionConflictError
            *name* exists as a counter or with other boundaries.
        """
        _check_name(name)
        bounds = validate_boundaries(name, DEFAULT_BUCKETS if boundaries is None else boundaries)
        return self._register(MetricDefinition(name, MetricType.HISTOGRAM, help, bounds))

    def _register(self, definition: MetricDefinition) -> MetricDefinition:
        with self._lock:
            existing = self._definitions.get(definition.name)
            if existing is not None:
                if not existing.same_shape(definition):
                    raise DefinitionConflictError(
                        definition.name, existing.describe(), definition.describe()
                    )
                return existing
            # Unlocked readers look the definition up first, so its series map must exist.
            self._series[definition.name] = {}
            self._definitions[definition.name] = definition
        _log.debug(
            "metrics.definition_registered",
            metric=definition.name,
            type=definition.type.value,
        )
        return definition

    def get_definition(self, name: str) -> MetricDefinition | None:
        return self._definitions.get(name)

    def definitions(self) -> list[MetricDefinition]:
        with self._lock:
            return sorted(self._definitions.values(), key=lambda d: d.name)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def increment(self, name: str, labels: Labels | None = None, delta: float = 1.0) -> None:
        """Add *delta* to the counter series identified by *name* and *labels*."""
        definition = self._definition(name, MetricType.COUNTER)
        if not delta >= 0:
            raise InvalidDeltaError(name, delta)
        series = self._series_for(definition, labels)
        series.add(float(delta))  # type: ignore[union-attr]

    def observe(self, name: str, labels: Labels | None, value: float) -> None:
        """Record *value* in the histogram series identified by *name* and *labels*."""
        definition = self._definition(name, MetricType.HISTOGRAM)
        series = self._series_for(definition, labels)
        series.record(float(value))  # type: ignore[union-attr]

    def reset(self) -> None:
        """Drop every series; definitions are kept."""
        with self._lock:
            for family in self._series.values():
                family.clear()
        _log.info("metrics.reset", metrics=len(self._definitions))

    def _definition(self, name: str, metric_type: MetricType) -> MetricDefinition:
        definition = self._definitions.get(name)
        if definition is None or definition.type is not metric_type:
            raise UnknownMetricError(name, metric_type.value)
        return definition

    def _series_for(self, definition: MetricDefinition, labels: Labels | None) -> Series:
        pairs, key = _checked_key(definition, labels)
        family = self._series[definition.name]
        series = family.get(key)
        if series is not None:
            return series

        with self._lock:
            series = family.get(key)
            if series is None:
                if definition.type is MetricType.COUNTER:
                    series = CounterSeries(pairs)
                else:
                    series = HistogramSeries(pairs, definition.boundaries)
                family[key] = series
        return series

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def collect(self) -> list[MetricFamily]:
        """Snapshot every metric that has at least one series.

        Each series is read atomically; the result as a whole is not a
        consistent cut across series.
        """
        with self._lock:
            entries = [
                (self._definitions[name], sorted(family.items()))
                for name, family in sorted(self._series.items())
                if family
            ]
        return [
            MetricFamily(definition, tuple(series.snapshot() for _, series in items))
            for definition, items in entries
        ]

    def export(self, *, include_help: bool = False) -> str:
        """Return the Prometheus text exposition of the whole registry."""
        return render(self.collect(), include_help=include_help)

    def counter_value(self, name: str, labels: Labels | None = None) -> float:
        """Current value of a counter series (``0.0`` if it was never incremented)."""
        definition = self._definition(name, MetricType.COUNTER)
        _, key = _checked_key(definition, labels)
        series = self._series[definition.name].get(key)
        return series.get() if series is not None else 0.0  # type: ignore[union-attr]

    def histogram_snapshot(self, name: str, labels: Labels | None = None) -> HistogramSample | None:
        """Snapshot of a histogram series, or ``None`` if it has no observations yet."""
        definition = self._definition(name, MetricType.HISTOGRAM)
        _, key = _checked_key(definition, labels)
        series = self._series[definition.name].get(key)
        return series.snapshot() if series is not None else None  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Metrics port
    # ------------------------------------------------------------------

    def counter(self, name: str, description: str = "") -> Counter:
        self.register_counter(name, description)
        return _RegistryCounter(self, name)

    def histogram(
        self,
        name: str,
        description: str = "",
        boundaries: list[float] | tuple[float, ...] | None = None,
    ) -> Histogram:
        self.register_histogram(name, description, boundaries)
        return _RegistryHistogram(self, name)


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not _METRIC_NAME.fullmatch(name):
        raise InvalidMetricNameError(str(name))


def _checked_key(definition: MetricDefinition, labels: Labels | None) -> tuple[LabelPairs, str]:
    # Names are not escaped in the key, so they must be valid before any lookup.
    pairs = canonical_labels(labels)
    _check_labels(definition, pairs)
    return pairs, format_pairs(pairs)


def _check_labels(definition: MetricDefinition, pairs: LabelPairs) -> None:
    for label, _ in pairs:
        if not _LABEL_NAME.fullmatch(label):
            raise InvalidLabelError(definition.name, label, "must match [a-zA-Z_][a-zA-Z0-9_]*")
        if label.startswith("__"):
            raise InvalidLabelError(definition.name, label, "names starting with '__' are reserved")
        if label == "le" and definition.type is MetricType.HISTOGRAM:
            raise InvalidLabelError(definition.name, label, "'le' is reserved for histogram buckets")


__all__ = ["MetricsRegistry"]
