"""FastAPI adapter – Prometheus scrape endpoint."""
from __future__ import annotations

from typing import Any

from mp_metrics.adapters.fastapi._compat import _require_fastapi
from mp_metrics.observability.metrics.exposition import CONTENT_TYPE_LATEST
from mp_metrics.observability.metrics.registry import MetricsRegistry


def FastAPIMetricsRouter(
    registry: MetricsRegistry,
    path: str = "/metrics",
    *,
    include_help: bool = False,
    tags: list[str] | None = None,
) -> Any:
    """Return a router serving ``GET {path}`` from *registry*.

    Parameters
    ----------
    registry:
        Registry whose :meth:`~MetricsRegistry.export` output becomes the body.
    path:
        Mount point of the scrape endpoint.
    include_help:
        Emit ``# HELP`` lines for metrics registered with help text.
    tags:
        OpenAPI tags for the generated route.
    """
    _require_fastapi()
    from fastapi import APIRouter  # type: ignore[import-untyped]
    from fastapi.responses import Response  # type: ignore[import-untyped]

    router = APIRouter()

    @router.get(path, tags=tags or ["ops"], include_in_schema=False)
    async def metrics() -> Any:
        return Response(
            content=registry.export(include_help=include_help),
            media_type=CONTENT_TYPE_LATEST,
        )

    return router


__all__ = ["FastAPIMetricsRouter"]
