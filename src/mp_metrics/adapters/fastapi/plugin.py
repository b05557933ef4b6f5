"""FastAPI adapter – MetricsPlugin wiring middleware and scrape endpoint."""
from __future__ import annotations

import dataclasses
from typing import Any

from mp_metrics.adapters.fastapi._compat import _require_fastapi
from mp_metrics.adapters.fastapi.middleware import FastAPIMetricsMiddleware
from mp_metrics.adapters.fastapi.routers import FastAPIMetricsRouter
from mp_metrics.config.settings import EnvSettingsLoader, MetricsSettings
from mp_metrics.observability.logging import get_logger
from mp_metrics.observability.metrics.instrumentation import HttpInstrumentation
from mp_metrics.observability.metrics.registry import MetricsRegistry

_log = get_logger(__name__)


class MetricsPlugin:
    """Collect HTTP request metrics and expose them for scraping.

    Usage::

        app = FastAPI()
        MetricsPlugin().install(app)
        # GET /metrics now returns the Prometheus text body

    Pass ``registry`` to share one registry with application code (for
    business counters next to the HTTP ones); otherwise a fresh registry
    is created per plugin.
    """

    name = "metrics"

    def __init__(
        self,
        path: str | None = None,
        registry: MetricsRegistry | None = None,
        settings: MetricsSettings | None = None,
    ) -> None:
        settings = settings or MetricsSettings()
        if path is not None:
            settings = dataclasses.replace(settings, path=path)
        self.settings = settings
        self.registry = registry if registry is not None else MetricsRegistry()
        self.instrumentation = HttpInstrumentation(
            self.registry,
            settings.buckets,
            include_help=settings.include_help,
        )

    @property
    def path(self) -> str:
        return self.settings.path

    @classmethod
    def from_env(cls, registry: MetricsRegistry | None = None) -> "MetricsPlugin":
        """Build a plugin from ``METRICS_PATH`` / ``METRICS_BUCKETS`` / ``METRICS_INCLUDE_HELP``."""
        return cls(registry=registry, settings=EnvSettingsLoader().load(MetricsSettings))

    def install(self, app: Any) -> Any:
        """Add the metrics middleware and the scrape route to *app*."""
        _require_fastapi()
        app.add_middleware(FastAPIMetricsMiddleware, instrumentation=self.instrumentation)
        app.include_router(
            FastAPIMetricsRouter(
                self.registry,
                self.settings.path,
                include_help=self.settings.include_help,
            )
        )
        _log.info("metrics.plugin_installed", path=self.settings.path)
        return app


__all__ = ["MetricsPlugin"]
