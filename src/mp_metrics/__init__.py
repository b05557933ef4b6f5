"""
mp_metrics – in-process Prometheus metrics.

Import path convention::

    from mp_metrics.observability.metrics import MetricsRegistry, normalize_path
    from mp_metrics.kernel.errors import DefinitionConflictError
    from mp_metrics.adapters.fastapi import MetricsPlugin
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
