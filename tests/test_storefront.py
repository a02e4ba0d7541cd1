"""Local cart and the storefront client."""

from decimal import Decimal

import httpx
import pytest

from services.storefront.cart import Cart
from services.storefront.client import StorefrontClient

LAPTOP = {"id": 1, "name": "Laptop", "price": "1299.99", "stock": 50}
HEADPHONES = {"id": 3, "name": "Headphones", "price": "299.99", "stock": 75}


class TestCart:
    def test_starts_empty(self):
        cart = Cart()
        assert cart.is_empty
        assert cart.total == Decimal("0")
        assert len(cart) == 0

    def test_add_new_product(self):
        cart = Cart()
        line = cart.add(LAPTOP)

        assert line.quantity == 1
        assert line.price == Decimal("1299.99")
        assert not cart.is_empty

    def test_adding_same_product_increments_quantity(self):
        cart = Cart()
        cart.add(LAPTOP)
        cart.add(LAPTOP)
        cart.add(LAPTOP, quantity=3)

        assert len(cart) == 1
        assert cart.lines[0].quantity == 5

    def test_total(self):
        cart = Cart()
        cart.add(LAPTOP, quantity=2)
        cart.add(HEADPHONES)
        assert cart.total == Decimal("2899.97")

    def test_keeps_insertion_order(self):
        cart = Cart()
        cart.add(HEADPHONES)
        cart.add(LAPTOP)
        cart.add(HEADPHONES)
        assert [line.product_id for line in cart.lines] == [3, 1]

    def test_rejects_non_positive_quantity(self):
        with pytest.raises(ValueError):
            Cart().add(LAPTOP, quantity=0)

    def test_remove_and_clear(self):
        cart = Cart()
        cart.add(LAPTOP)
        cart.add(HEADPHONES)

        cart.remove(1)
        assert [line.product_id for line in cart.lines] == [3]

        cart.clear()
        assert cart.is_empty

    def test_order_request(self):
        cart = Cart()
        cart.add(LAPTOP, quantity=2)
        cart.add(HEADPHONES)

        assert cart.to_order_request() == {
            "items": [
                {"product_id": 1, "quantity": 2, "price": "1299.99"},
                {"product_id": 3, "quantity": 1, "price": "299.99"},
            ]
        }


@pytest.fixture
def storefront(order_app):
    transport = httpx.ASGITransport(app=order_app)
    return StorefrontClient("http://products", "http://orders", transport=transport)


class TestStorefrontClient:
    async def test_checkout_creates_order_and_clears_cart(self, storefront, stock_adjuster):
        cart = Cart()
        cart.add(LAPTOP, quantity=2)
        cart.add(HEADPHONES)

        order = await storefront.checkout(cart)

        assert Decimal(order["total_amount"]) == Decimal("2899.97")
        assert order["status"] == "pending"
        assert cart.is_empty
        assert stock_adjuster.calls == [(1, 2), (3, 1)]

    async def test_checkout_refuses_empty_cart(self, storefront):
        with pytest.raises(ValueError):
            await storefront.checkout(Cart())
        assert await storefront.list_orders() == []

    async def test_read_back_orders(self, storefront):
        cart = Cart()
        cart.add(LAPTOP)
        order = await storefront.checkout(cart)

        fetched = await storefront.get_order(order["id"])
        assert [i["product_id"] for i in fetched["items"]] == [1]
        assert [o["id"] for o in await storefront.list_orders()] == [order["id"]]

    async def test_update_order_status(self, storefront):
        cart = Cart()
        cart.add(LAPTOP)
        order = await storefront.checkout(cart)

        updated = await storefront.update_order_status(order["id"], "shipped")
        assert updated["status"] == "shipped"

    async def test_missing_order_raises(self, storefront):
        with pytest.raises(httpx.HTTPStatusError):
            await storefront.get_order(9999)

    async def test_catalog_reads(self, product_app):
        storefront = StorefrontClient(
            "http://products", "http://orders", transport=httpx.ASGITransport(app=product_app)
        )
        assert await storefront.list_products() == []

        with pytest.raises(httpx.HTTPStatusError):
            await storefront.get_product(1)


class TestStorefrontClientUrls:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PRODUCTS_SERVICE", raising=False)
        monkeypatch.delenv("ORDERS_SERVICE", raising=False)

        storefront = StorefrontClient()

        assert storefront.products_url == "http://products-service:3001"
        assert storefront.orders_url == "http://orders-service:3002"

    def test_environment_read_at_construction(self, monkeypatch):
        monkeypatch.setenv("PRODUCTS_SERVICE", "http://localhost:3001/")
        monkeypatch.setenv("ORDERS_SERVICE", "http://localhost:3002")

        storefront = StorefrontClient()

        assert storefront.products_url == "http://localhost:3001"
        assert storefront.orders_url == "http://localhost:3002"

    def test_explicit_urls_win(self, monkeypatch):
        monkeypatch.setenv("PRODUCTS_SERVICE", "http://localhost:3001")
        monkeypatch.setenv("ORDERS_SERVICE", "http://localhost:3002")

        storefront = StorefrontClient("http://catalog", "http://checkout")

        assert storefront.products_url == "http://catalog"
        assert storefront.orders_url == "http://checkout"
