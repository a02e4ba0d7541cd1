"""
Stock adjustment capability used by the order coordinator.

The coordinator only depends on the StockAdjuster protocol. HttpStockAdjuster
is the production implementation that talks to the inventory service; tests
and any future retry queue or event log can be swapped in without touching
order creation.
"""
from typing import Optional, Protocol

import httpx

from shared.errors import UpstreamAdjustmentError


class StockAdjuster(Protocol):
    async def adjust_stock(self, product_id: int, quantity: int) -> dict:
        """Decrement a product's stock. Raises on any failure."""
        ...


class HttpStockAdjuster:
    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def adjust_stock(self, product_id: int, quantity: int) -> dict:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.patch(
                    f"/products/{product_id}/stock", json={"quantity": quantity}
                )
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise UpstreamAdjustmentError(
                product_id,
                f"inventory service responded {status_code}",
                not_found=status_code == 404,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamAdjustmentError(product_id, str(e) or type(e).__name__) from e
