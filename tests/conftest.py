import asyncio

import httpx
import pytest

from services.order_service.main import create_app as create_order_app
from services.product_service.main import create_app as create_product_app
from shared.config.settings import ServiceConfig
from shared.errors import UpstreamAdjustmentError


def make_config(tmp_path, service_name, **overrides):
    defaults = {
        "service_name": service_name,
        "database_url": f"sqlite+aiosqlite:///{tmp_path / service_name}.db",
        "metrics_enabled": False,
        "seed_catalog": False,
        "adjustment_timeout": 1.0,
    }
    defaults.update(overrides)
    return ServiceConfig(**defaults)


class FakeStockAdjuster:
    """Records every adjustment call; fails or hangs for chosen product ids."""

    def __init__(self, missing=(), hanging=(), broken=()):
        self.calls = []
        self.missing = set(missing)
        self.hanging = set(hanging)
        self.broken = set(broken)

    async def adjust_stock(self, product_id, quantity):
        self.calls.append((product_id, quantity))
        if product_id in self.hanging:
            await asyncio.sleep(3600)
        if product_id in self.missing:
            raise UpstreamAdjustmentError(product_id, "inventory service responded 404", not_found=True)
        if product_id in self.broken:
            raise RuntimeError("adjuster bug")
        return {"id": product_id, "stock": 100 - quantity}


@pytest.fixture
async def product_app(tmp_path):
    app = create_product_app(make_config(tmp_path, "products"))
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def product_client(product_app):
    transport = httpx.ASGITransport(app=product_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://inventory") as client:
        yield client


@pytest.fixture
def stock_adjuster():
    return FakeStockAdjuster()


@pytest.fixture
async def order_app(tmp_path, stock_adjuster):
    app = create_order_app(make_config(tmp_path, "orders"), stock_adjuster=stock_adjuster)
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def order_client(order_app):
    transport = httpx.ASGITransport(app=order_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://orders") as client:
        yield client


@pytest.fixture
def sessionmaker(order_app):
    return order_app.state.sessionmaker


@pytest.fixture
async def db(sessionmaker):
    async with sessionmaker() as session:
        yield session


@pytest.fixture
def coordinator(order_app):
    return order_app.state.coordinator
