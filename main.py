"""
Single-process dev cluster: both services in one ASGI app.

    uvicorn main:app --port 8000

The inventory service is mounted at /inventory and the order service at
/ordering. Stock adjustments are routed to the mounted inventory app in
process, so no second port is needed.
"""
from contextlib import asynccontextmanager
from dataclasses import replace

import httpx
from fastapi import FastAPI

from services.order_service.main import create_app as create_order_app
from services.order_service.stock_adjuster import HttpStockAdjuster
from services.product_service.main import create_app as create_product_app
from shared.config.settings import ServiceConfig
from shared.observability.setup import configure_metrics


def create_cluster_app() -> FastAPI:
    product_config = ServiceConfig.from_env("products")
    order_config = ServiceConfig.from_env("orders")

    # HTTP metrics are collected once, on the outer app
    metrics_enabled = product_config.metrics_enabled
    product_config = replace(product_config, metrics_enabled=False)
    order_config = replace(order_config, metrics_enabled=False)

    product_app = create_product_app(product_config)
    order_app = create_order_app(
        order_config,
        stock_adjuster=HttpStockAdjuster(
            "http://inventory",
            timeout=order_config.adjustment_timeout,
            transport=httpx.ASGITransport(app=product_app),
        ),
    )

    # Mounted apps do not run their own lifespan
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with product_app.router.lifespan_context(product_app):
            async with order_app.router.lifespan_context(order_app):
                yield

    app = FastAPI(title="Ecommerce Cluster", lifespan=lifespan)
    if metrics_enabled:
        configure_metrics(app)
    app.mount("/inventory", product_app)
    app.mount("/ordering", order_app)
    return app


app = create_cluster_app()
