"""Metrics errors — local validation failures raised by the registry.

None of these are retried. A failed call never mutates registry state.
"""

from __future__ import annotations

from typing import Any, Sequence

from mp_metrics.kernel.errors.base import BaseError


class MetricsError(BaseError):
    """A metric call was malformed."""

    default_code = "metrics_error"


class DefinitionConflictError(MetricsError):
    """A name was re-registered with another type or other boundaries."""

    default_code = "definition_conflict"

    def __init__(self, name: str, existing: Any, requested: Any) -> None:
        super().__init__(
            f"Metric '{name}' is already registered as {existing}, cannot register as {requested}",
            detail={"metric": name, "existing": str(existing), "requested": str(requested)},
        )
        self.name = name


class UnknownMetricError(MetricsError):
    """``increment``/``observe`` against a name not registered with that type."""

    default_code = "unknown_metric"

    def __init__(self, name: str, expected_type: str) -> None:
        super().__init__(
            f"No {expected_type} named '{name}' is registered",
            detail={"metric": name, "expected_type": expected_type},
        )
        self.name = name
        self.expected_type = expected_type


class InvalidDeltaError(MetricsError):
    """Counters only go up."""

    default_code = "invalid_delta"

    def __init__(self, name: str, delta: float) -> None:
        super().__init__(
            f"Counter '{name}' cannot be incremented by {delta!r}",
            detail={"metric": name, "delta": delta},
        )
        self.name = name
        self.delta = delta


class InvalidBoundariesError(MetricsError):
    """Histogram boundaries must be non-empty, finite and strictly ascending."""

    default_code = "invalid_boundaries"

    def __init__(self, name: str, boundaries: Sequence[float], reason: str) -> None:
        super().__init__(
            f"Histogram '{name}' has invalid boundaries {list(boundaries)!r}: {reason}",
            detail={"metric": name, "boundaries": list(boundaries), "reason": reason},
        )
        self.name = name
        self.boundaries = tuple(boundaries)
        self.reason = reason


class InvalidMetricNameError(MetricsError):
    """The name does not match ``[a-zA-Z_:][a-zA-Z0-9_:]*``."""

    default_code = "invalid_metric_name"

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid metric name {name!r}", detail={"metric": name})
        self.name = name


class InvalidLabelError(MetricsError):
    """A label name is malformed or reserved."""

    default_code = "invalid_label"

    def __init__(self, name: str, label: str, reason: str) -> None:
        super().__init__(
            f"Invalid label {label!r} for metric '{name}': {reason}",
            detail={"metric": name, "label": label, "reason": reason},
        )
        self.name = name
        self.label = label
        self.reason = reason


__all__ = [
    "DefinitionConflictError",
    "InvalidBoundariesError",
    "InvalidDeltaError",
    "InvalidLabelError",
    "InvalidMetricNameError",
    "MetricsError",
    "UnknownMetricError",
]
