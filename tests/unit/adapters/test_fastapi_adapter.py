"""Unit / integration tests for the FastAPI metrics adapter."""
from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mp_metrics.adapters.fastapi import (
    FastAPIMetricsMiddleware,
    FastAPIMetricsRouter,
    MetricsPlugin,
)
from mp_metrics.config import InvalidSettingValueError, MetricsSettings
from mp_metrics.kernel.errors import UnknownMetricError
from mp_metrics.observability.metrics import (
    HTTP_REQUEST_DURATION_SECONDS,
    HTTP_REQUESTS_TOTAL,
    HttpInstrumentation,
    MetricsRegistry,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class UnavailableRegistry(MetricsRegistry):
    def increment(self, name, labels=None, delta=1.0):
        raise UnknownMetricError(name, "counter")


def make_app(plugin: MetricsPlugin) -> FastAPI:
    app = FastAPI()
    plugin.install(app)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"hello": "world"}

    @app.get("/users/{user_id}")
    async def get_user(user_id: str) -> dict[str, str]:
        return {"id": user_id}

    @app.post("/users", status_code=201)
    async def create_user() -> dict[str, bool]:
        return {"created": True}

    @app.get("/boom")
    async def boom() -> dict[str, str]:
        raise RuntimeError("kaboom")

    return app


def requests_total(registry: MetricsRegistry, method: str, path: str, status: str) -> float:
    return registry.counter_value(
        HTTP_REQUESTS_TOTAL, {"method": method, "path": path, "status": status}
    )


# ---------------------------------------------------------------------------
# MetricsPlugin
# ---------------------------------------------------------------------------

class TestMetricsPlugin:
    def test_defaults(self) -> None:
        plugin = MetricsPlugin()
        assert plugin.name == "metrics"
        assert plugin.path == "/metrics"
        assert isinstance(plugin.registry, MetricsRegistry)

    def test_each_plugin_gets_fresh_registry(self) -> None:
        assert MetricsPlugin().registry is not MetricsPlugin().registry

    def test_injected_registry_is_shared(self) -> None:
        registry = MetricsRegistry()
        plugin = MetricsPlugin(registry=registry)
        assert plugin.registry is registry
        assert registry.get_definition(HTTP_REQUESTS_TOTAL) is not None

    def test_invalid_path_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            MetricsPlugin(path="metrics")

    def test_settings_supply_path_and_buckets(self) -> None:
        plugin = MetricsPlugin(settings=MetricsSettings(path="/prom", buckets=(0.5, 1.0)))
        assert plugin.path == "/prom"
        assert plugin.registry.get_definition(HTTP_REQUEST_DURATION_SECONDS).boundaries == (0.5, 1.0)

    def test_explicit_path_overrides_settings(self) -> None:
        plugin = MetricsPlugin(path="/x", settings=MetricsSettings(path="/prom"))
        assert plugin.path == "/x"

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("METRICS_PATH", "/ops/metrics")
        assert MetricsPlugin.from_env().path == "/ops/metrics"


# ---------------------------------------------------------------------------
# Scrape endpoint
# ---------------------------------------------------------------------------

class TestMetricsEndpoint:
    def test_content_type_and_status(self) -> None:
        client = TestClient(make_app(MetricsPlugin()))
        resp = client.get("/metrics")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain; version=0.0.4")

    def test_body_is_registry_export(self) -> None:
        plugin = MetricsPlugin()
        client = TestClient(make_app(plugin))
        client.get("/")
        resp = client.get("/metrics")
        assert "# TYPE http_requests_total counter" in resp.text
        assert 'http_requests_total{method="GET",path="/",status="200"} 1' in resp.text
        assert "# TYPE http_request_duration_seconds histogram" in resp.text

    def test_custom_path(self) -> None:
        client = TestClient(make_app(MetricsPlugin(path="/internal/metrics")))
        assert client.get("/internal/metrics").status_code == 200
        assert client.get("/metrics").status_code == 404

    def test_empty_registry_has_empty_body(self) -> None:
        registry = MetricsRegistry()
        app = FastAPI()
        app.include_router(FastAPIMetricsRouter(registry))
        resp = TestClient(app).get("/metrics")
        assert resp.status_code == 200
        assert resp.text == ""

    def test_router_include_help(self) -> None:
        registry = MetricsRegistry()
        registry.register_counter("jobs_total", "Jobs processed")
        registry.increment("jobs_total")
        app = FastAPI()
        app.include_router(FastAPIMetricsRouter(registry, include_help=True))
        assert "# HELP jobs_total Jobs processed" in TestClient(app).get("/metrics").text

    def test_business_metrics_share_endpoint(self) -> None:
        registry = MetricsRegistry()
        orders = registry.counter("orders_created_total", "Orders created")
        client = TestClient(make_app(MetricsPlugin(registry=registry)))
        orders.add(labels={"channel": "web"})
        assert 'orders_created_total{channel="web"} 1' in client.get("/metrics").text


# ---------------------------------------------------------------------------
# Request instrumentation
# ---------------------------------------------------------------------------

class TestFastAPIMetricsMiddleware:
    def test_path_is_normalised(self) -> None:
        plugin = MetricsPlugin()
        client = TestClient(make_app(plugin))
        client.get("/users/123")
        client.get("/users/550e8400-e29b-41d4-a716-446655440000")
        client.get("/users/alice")
        assert requests_total(plugin.registry, "GET", "/users/:id", "200") == 2
        assert requests_total(plugin.registry, "GET", "/users/alice", "200") == 1

    def test_status_and_method_labels(self) -> None:
        plugin = MetricsPlugin()
        client = TestClient(make_app(plugin))
        client.post("/users")
        client.get("/missing")
        assert requests_total(plugin.registry, "POST", "/users", "201") == 1
        assert requests_total(plugin.registry, "GET", "/missing", "404") == 1

    def test_duration_observed(self) -> None:
        plugin = MetricsPlugin()
        client = TestClient(make_app(plugin))
        client.get("/")
        snap = plugin.registry.histogram_snapshot(
            HTTP_REQUEST_DURATION_SECONDS, {"method": "GET", "path": "/", "status": "200"}
        )
        assert snap is not None
        assert snap.count == 1
        assert snap.sum >= 0

    def test_unhandled_exception_recorded_as_500(self) -> None:
        plugin = MetricsPlugin()
        client = TestClient(make_app(plugin), raise_server_exceptions=False)
        resp = client.get("/boom")
        assert resp.status_code == 500
        assert requests_total(plugin.registry, "GET", "/boom", "500") == 1

    def test_exception_propagates(self) -> None:
        client = TestClient(make_app(MetricsPlugin()))
        with pytest.raises(RuntimeError, match="kaboom"):
            client.get("/boom")

    def test_scrapes_are_counted(self) -> None:
        plugin = MetricsPlugin()
        client = TestClient(make_app(plugin))
        client.get("/metrics")
        assert requests_total(plugin.registry, "GET", "/metrics", "200") == 1

    def test_middleware_directly(self) -> None:
        registry = MetricsRegistry()
        app = FastAPI()
        app.add_middleware(FastAPIMetricsMiddleware, instrumentation=HttpInstrumentation(registry))

        @app.get("/ping")
        async def ping() -> dict[str, str]:
            return {"pong": "true"}

        TestClient(app).get("/ping")
        assert requests_total(registry, "GET", "/ping", "200") == 1

    def test_instrumentation_failure_does_not_break_request(self) -> None:
        plugin = MetricsPlugin(registry=UnavailableRegistry())
        client = TestClient(make_app(plugin))
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json() == {"hello": "world"}
