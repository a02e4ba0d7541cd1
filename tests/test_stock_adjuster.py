"""HttpStockAdjuster against a mocked transport."""

import json

import httpx
import pytest

from services.order_service.stock_adjuster import HttpStockAdjuster
from shared.errors import UpstreamAdjustmentError


def _adjuster(handler):
    return HttpStockAdjuster("http://inventory:3001/", timeout=1.0, transport=httpx.MockTransport(handler))


class TestHttpStockAdjuster:
    async def test_patches_stock_endpoint(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"id": 7, "stock": 45})

        product = await _adjuster(handler).adjust_stock(7, 5)

        assert product == {"id": 7, "stock": 45}
        assert seen[0].method == "PATCH"
        assert str(seen[0].url) == "http://inventory:3001/products/7/stock"
        assert json.loads(seen[0].content) == {"quantity": 5}

    async def test_not_found(self):
        adjuster = _adjuster(lambda request: httpx.Response(404, json={"detail": "Product not found"}))

        with pytest.raises(UpstreamAdjustmentError) as exc_info:
            await adjuster.adjust_stock(99, 1)

        assert exc_info.value.product_id == 99
        assert exc_info.value.not_found is True

    async def test_server_error(self):
        adjuster = _adjuster(lambda request: httpx.Response(500, json={"detail": "Internal server error"}))

        with pytest.raises(UpstreamAdjustmentError) as exc_info:
            await adjuster.adjust_stock(1, 1)

        assert exc_info.value.not_found is False
        assert "500" in exc_info.value.reason

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamAdjustmentError, match="connection refused"):
            await _adjuster(handler).adjust_stock(1, 1)

    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UpstreamAdjustmentError):
            await _adjuster(handler).adjust_stock(1, 1)
