from dataclasses import dataclass
from decimal import Decimal


@dataclass
class CartLine:
    product_id: int
    name: str
    price: Decimal
    quantity: int = 1

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Cart:
    """Local, ephemeral cart. Nothing is persisted until checkout."""

    def __init__(self):
        self._lines: list[CartLine] = []

    def add(self, product: dict, quantity: int = 1) -> CartLine:
        """Add a product (as returned by the inventory service).

        Adding a product already in the cart bumps its quantity; the price
        captured on first add is kept.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be a positive integer")

        for line in self._lines:
            if line.product_id == product["id"]:
                line.quantity += quantity
                return line

        line = CartLine(
            product_id=product["id"],
            name=product.get("name", ""),
            price=Decimal(str(product["price"])),
            quantity=quantity,
        )
        self._lines.append(line)
        return line

    def remove(self, product_id: int):
        self._lines = [line for line in self._lines if line.product_id != product_id]

    def clear(self):
        self._lines = []

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total(self) -> Decimal:
        return sum((line.subtotal for line in self._lines), Decimal("0"))

    def to_order_request(self) -> dict:
        return {
            "items": [
                {"product_id": line.product_id, "quantity": line.quantity, "price": str(line.price)}
                for line in self._lines
            ]
        }

    def __len__(self):
        return len(self._lines)
