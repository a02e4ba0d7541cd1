"""
Inventory service: product catalog and stock.

Run standalone with:
    uvicorn services.product_service.main:create_app --factory --port 3001
"""
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI

from shared.config.database import build_engine, build_sessionmaker, create_tables
from shared.config.settings import ServiceConfig
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from .models import PRODUCT_SCHEMA, Product
from .router import router, public_router
from .service import ProductService

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: ServiceConfig = app.state.config
    await create_tables(app.state.engine, PRODUCT_SCHEMA, [Product.__table__])
    if config.seed_catalog:
        async with app.state.sessionmaker() as db:
            await ProductService.seed_catalog(db)
    logger.info("service_started", service=config.service_name, port=config.port)

    yield

    await app.state.engine.dispose()
    logger.info("service_stopped", service=config.service_name)


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    config = config or ServiceConfig.from_env("products")

    product_app = FastAPI(title="Product Service", version="1.0.0", lifespan=lifespan)
    product_app.state.config = config
    product_app.state.engine = build_engine(config)
    product_app.state.sessionmaker = build_sessionmaker(product_app.state.engine)

    # --- OBSERVABILITY BOOTSTRAP ---
    setup_observability(product_app, config)
    register_exception_handlers(product_app)

    product_app.include_router(public_router)
    product_app.include_router(router)
    return product_app
