"""Observability – metric types, definitions and the Counter/Histogram/Metrics ports."""
from __future__ import annotations

import abc
import dataclasses
import enum
from typing import Mapping

# Seconds; suited to HTTP request latency.
DEFAULT_BUCKETS: tuple[float, ...] = (
    0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0,
)


class MetricType(str, enum.Enum):
    """Supported metric types; the value is the exposition ``# TYPE`` token."""

    COUNTER = "counter"
    HISTOGRAM = "histogram"

    def __str__(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class MetricDefinition:
    """Registration record shared by every series of one metric name."""

    name: str
    type: MetricType
    help: str = ""
    boundaries: tuple[float, ...] = ()

    def same_shape(self, other: "MetricDefinition") -> bool:
        """Return ``True`` when *other* may be registered over this one."""
        return self.type is other.type and self.boundaries == other.boundaries

    def describe(self) -> str:
        if self.type is MetricType.HISTOGRAM:
            return f"histogram{list(self.boundaries)}"
        return self.type.value


Labels = Mapping[str, object]


class Counter(abc.ABC):
    """Monotonically increasing counter."""

    @abc.abstractmethod
    def add(self, value: float = 1.0, labels: Labels | None = None) -> None: ...


class Histogram(abc.ABC):
    """Bucketed distribution, typically request latency in seconds."""

    @abc.abstractmethod
    def record(self, value: float, labels: Labels | None = None) -> None: ...


class Metrics(abc.ABC):
    """Port: factory for metric instruments."""

    @abc.abstractmethod
    def counter(self, name: str, description: str = "") -> Counter: ...

    @abc.abstractmethod
    def histogram(
        self,
        name: str,
        description: str = "",
        boundaries: list[float] | tuple[float, ...] | None = None,
    ) -> Histogram: ...


__all__ = [
    "DEFAULT_BUCKETS",
    "Counter",
    "Histogram",
    "Labels",
    "MetricDefinition",
    "MetricType",
    "Metrics",
]
