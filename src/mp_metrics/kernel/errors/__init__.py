"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── MetricsError             (metrics.py)
    │   ├── DefinitionConflictError
    │   ├── UnknownMetricError
    │   ├── InvalidDeltaError
    │   ├── InvalidBoundariesError
    │   ├── InvalidMetricNameError
    │   └── InvalidLabelError
    └── ConfigError              (mp_metrics.config.validation)
"""

from mp_metrics.kernel.errors.base import BaseError
from mp_metrics.kernel.errors.metrics import (
    DefinitionConflictError,
    InvalidBoundariesError,
    InvalidDeltaError,
    InvalidLabelError,
    InvalidMetricNameError,
    MetricsError,
    UnknownMetricError,
)

__all__ = [
    "BaseError",
    "DefinitionConflictError",
    "InvalidBoundariesError",
    "InvalidDeltaError",
    "InvalidLabelError",
    "InvalidMetricNameError",
    "MetricsError",
    "UnknownMetricError",
]
