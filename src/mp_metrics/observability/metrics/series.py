"""Observability – per-series state containers.

Each series owns one ``threading.Lock``. A histogram update touches its
bucket, sum and count under that single lock, so readers never see a
partially applied observation.
"""
from __future__ import annotations

import bisect
import dataclasses
import math
import threading
from typing import Iterable

from mp_metrics.kernel.errors import InvalidBoundariesError
from mp_metrics.observability.metrics.labels import LabelPairs


def validate_boundaries(name: str, boundaries: Iterable[float]) -> tuple[float, ...]:
    """Return *boundaries* as a tuple of floats, or raise :class:`InvalidBoundariesError`.

    A trailing ``+Inf`` is dropped since the overflow bucket is implicit.
    """
    raw = list(boundaries)
    try:
        bounds = [float(b) for b in raw]
    except (TypeError, ValueError) as exc:
        raise InvalidBoundariesError(name, raw, "boundaries must be numbers") from exc
    if bounds and bounds[-1] == math.inf:
        bounds.pop()
    if not bounds:
        raise InvalidBoundariesError(name, raw, "at least one finite boundary is required")
    if not all(math.isfinite(b) for b in bounds):
        raise InvalidBoundariesError(name, raw, "boundaries must be finite")
    if any(lo >= hi for lo, hi in zip(bounds, bounds[1:])):
        raise InvalidBoundariesError(name, raw, "boundaries must be strictly ascending")
    return tuple(bounds)


@dataclasses.dataclass(frozen=True)
class CounterSample:
    labels: LabelPairs
    value: float


@dataclasses.dataclass(frozen=True)
class HistogramSample:
    """Point-in-time histogram state; ``buckets`` holds cumulative counts."""

    labels: LabelPairs
    buckets: tuple[tuple[float, int], ...]
    sum: float
    count: int

    def bucket(self, boundary: float) -> int:
        """Cumulative count for *boundary* (``math.inf`` for the overflow bucket)."""
        for bound, cumulative in self.buckets:
            if bound == boundary:
                return cumulative
        raise KeyError(boundary)


class CounterSeries:
    """Value of one counter series."""

    __slots__ = ("labels", "_lock", "_value")

    def __init__(self, labels: LabelPairs) -> None:
        self.labels = labels
        self._lock = threading.Lock()
        self._value = 0.0

    def add(self, delta: float) -> None:
        with self._lock:
            self._value += delta

    def get(self) -> float:
        with self._lock:
            return self._value

    def snapshot(self) -> CounterSample:
        return CounterSample(self.labels, self.get())


class HistogramSeries:
    """Buckets, sum and count of one histogram series.

    Counts are stored per bucket (the last slot is the ``+Inf`` overflow)
    and made cumulative when a snapshot is taken.
    """

    __slots__ = ("labels", "_bounds", "_lock", "_counts", "_sum", "_count")

    def __init__(self, labels: LabelPairs, bounds: tuple[float, ...]) -> None:
        self.labels = labels
        self._bounds = bounds
        self._lock = threading.Lock()
        self._counts = [0] * (len(bounds) + 1)
        self._sum = 0.0
        self._count = 0

    def record(self, value: float) -> None:
        # First bucket whose boundary is >= value; NaN only reaches +Inf.
        index = len(self._bounds) if math.isnan(value) else bisect.bisect_left(self._bounds, value)
        with self._lock:
            self._counts[index] += 1
            self._sum += value
            self._count += 1

    def snapshot(self) -> HistogramSample:
        with self._lock:
            counts = list(self._counts)
            total = self._sum
            count = self._count
        buckets: list[tuple[float, int]] = []
        cumulative = 0
        for bound, n in zip((*self._bounds, math.inf), counts):
            cumulative += n
            buckets.append((bound, cumulative))
        return HistogramSample(self.labels, tuple(buckets), total, count)


__all__ = [
    "CounterSample",
    "CounterSeries",
    "HistogramSample",
    "HistogramSeries",
    "validate_boundaries",
]
