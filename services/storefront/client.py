"""
Async client for the storefront: catalog reads and order submission.

Non-success responses raise httpx.HTTPStatusError; the caller decides how to
render them.
"""
import os
from typing import Optional

import httpx
import structlog

from .cart import Cart

logger = structlog.get_logger(__name__)

DEFAULT_PRODUCTS_URL = "http://products-service:3001"
DEFAULT_ORDERS_URL = "http://orders-service:3002"


class StorefrontClient:
    def __init__(
        self,
        products_url: Optional[str] = None,
        orders_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        # Environment is consulted per instance, not at import
        products_url = products_url or os.getenv("PRODUCTS_SERVICE", DEFAULT_PRODUCTS_URL)
        orders_url = orders_url or os.getenv("ORDERS_SERVICE", DEFAULT_ORDERS_URL)
        self.products_url = products_url.rstrip("/")
        self.orders_url = orders_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self, base_url: str) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=base_url, timeout=self.timeout, transport=self.transport)

    async def _get(self, base_url: str, path: str):
        async with self._client(base_url) as client:
            resp = await client.get(path)
            resp.raise_for_status()
            return resp.json()

    async def list_products(self) -> list[dict]:
        return await self._get(self.products_url, "/products")

    async def get_product(self, product_id: int) -> dict:
        return await self._get(self.products_url, f"/products/{product_id}")

    async def list_orders(self) -> list[dict]:
        return await self._get(self.orders_url, "/orders")

    async def get_order(self, order_id: int) -> dict:
        return await self._get(self.orders_url, f"/orders/{order_id}")

    async def checkout(self, cart: Cart) -> dict:
        """Submit the cart as an order. The cart is emptied only once the order is recorded."""
        if cart.is_empty:
            raise ValueError("Cart is empty")

        async with self._client(self.orders_url) as client:
            resp = await client.post("/orders", json=cart.to_order_request())
            resp.raise_for_status()
            order = resp.json()

        logger.info("checkout_completed", order_id=order["id"], items=len(cart))
        cart.clear()
        return order

    async def update_order_status(self, order_id: int, status: str) -> dict:
        async with self._client(self.orders_url) as client:
            resp = await client.patch(f"/orders/{order_id}/status", json={"status": status})
            resp.raise_for_status()
            return resp.json()
