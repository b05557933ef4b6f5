"""Example: FastAPI service exposing Prometheus metrics.

Run with::

    pip install "mp-metrics[fastapi]" uvicorn
    uvicorn docs.examples.app:app --port 3000

Then::

    curl http://localhost:3000/
    curl http://localhost:3000/users/123
    curl -X POST http://localhost:3000/orders
    curl http://localhost:3000/slow
    curl http://localhost:3000/metrics
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI

from mp_metrics.adapters.fastapi import MetricsPlugin
from mp_metrics.observability.logging import JsonLoggerFactory
from mp_metrics.observability.metrics import MetricsRegistry

JsonLoggerFactory.configure(logging.INFO)

registry = MetricsRegistry()
orders_created = registry.counter("orders_created_total", "Orders created")

app = FastAPI()
MetricsPlugin(registry=registry).install(app)


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": "Hello, metrics!"}


@app.get("/users/{user_id}")
async def get_user(user_id: str) -> dict[str, str]:
    return {"id": user_id, "name": f"User {user_id}"}


@app.post("/orders", status_code=201)
async def create_order() -> dict[str, bool]:
    orders_created.add(labels={"channel": "api"})
    return {"created": True}


@app.get("/slow")
async def slow() -> dict[str, str]:
    await asyncio.sleep(0.5)
    return {"status": "done"}
