"""FastAPI adapter – request metrics ASGI middleware."""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from mp_metrics.adapters.fastapi._compat import _require_fastapi
from mp_metrics.observability.metrics.instrumentation import HttpInstrumentation

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


class FastAPIMetricsMiddleware:
    """Record request count and latency for every HTTP request.

    The status is taken from ``http.response.start``. When the inner app
    raises before a response has started, the request is recorded as a
    ``500`` and the exception propagates unchanged.
    """

    def __init__(self, app: "ASGIApp", instrumentation: HttpInstrumentation) -> None:
        _require_fastapi()
        self.app = app
        self._instrumentation = instrumentation

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        path = scope.get("path", "/")
        start = time.perf_counter()
        status_code: list[int] = [500]

        async def send_capturing(message: Any) -> None:
            if message["type"] == "http.response.start":
                status_code[0] = message.get("status", 200)
            await send(message)

        try:
            await self.app(scope, receive, send_capturing)
        finally:
            elapsed = time.perf_counter() - start
            self._instrumentation.record(method, path, status_code[0], elapsed)


__all__ = ["FastAPIMetricsMiddleware"]
