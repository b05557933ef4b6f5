"""FastAPI adapter – metrics middleware, scrape router and plugin."""
from mp_metrics.adapters.fastapi.middleware import FastAPIMetricsMiddleware
from mp_metrics.adapters.fastapi.plugin import MetricsPlugin
from mp_metrics.adapters.fastapi.routers import FastAPIMetricsRouter

__all__ = ["FastAPIMetricsMiddleware", "FastAPIMetricsRouter", "MetricsPlugin"]
