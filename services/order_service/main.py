"""
Order service: order records and the order-creation coordinator.

Run standalone with:
    uvicorn services.order_service.main:create_app --factory --port 3002
"""
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI

from shared.config.database import build_engine, build_sessionmaker, create_tables
from shared.config.settings import ServiceConfig
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from .models import ORDER_SCHEMA, Order, OrderItem
from .router import router, public_router
from .service import OrderCoordinator
from .stock_adjuster import HttpStockAdjuster, StockAdjuster

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: ServiceConfig = app.state.config
    await create_tables(app.state.engine, ORDER_SCHEMA, [Order.__table__, OrderItem.__table__])
    logger.info(
        "service_started",
        service=config.service_name,
        port=config.port,
        inventory_url=config.inventory_url,
    )

    yield

    await app.state.engine.dispose()
    logger.info("service_stopped", service=config.service_name)


def create_app(
    config: Optional[ServiceConfig] = None,
    stock_adjuster: Optional[StockAdjuster] = None,
) -> FastAPI:
    config = config or ServiceConfig.from_env("orders")
    if stock_adjuster is None:
        stock_adjuster = HttpStockAdjuster(config.inventory_url, timeout=config.adjustment_timeout)

    order_app = FastAPI(title="Order Service", version="1.0.0", lifespan=lifespan)
    order_app.state.config = config
    order_app.state.engine = build_engine(config)
    order_app.state.sessionmaker = build_sessionmaker(order_app.state.engine)
    order_app.state.coordinator = OrderCoordinator(stock_adjuster, config.adjustment_timeout)

    # --- OBSERVABILITY BOOTSTRAP ---
    setup_observability(order_app, config)
    register_exception_handlers(order_app)

    order_app.include_router(public_router)
    order_app.include_router(router)
    return order_app
