import asyncio
import time
from decimal import Decimal
from typing import Sequence

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import InvalidRequest, NotFound, StorageError, UpstreamAdjustmentError
from shared.observability import (
    ecomm_order_creation_duration_seconds,
    ecomm_orders_created_total,
    ecomm_stock_adjustment_total,
)
from .models import Order, OrderItem
from .repository import OrderRepository
from .schemas import OrderItemCreate
from .status import PENDING, OrderStatus
from .stock_adjuster import StockAdjuster

logger = structlog.get_logger(__name__)

# Largest amount a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")


class OrderCoordinator:
    """
    Records orders and then asks the inventory service to decrement stock.

    The order and its items are committed in one local transaction. Stock is
    adjusted afterwards, one call per line item, each bounded by
    ``adjustment_timeout``. A failed adjustment is logged and counted but never
    rolls back the order, is not retried, and is not reported to the caller.
    There is no compensation step: the order is the record of what was
    promised, stock is only approximately in sync with it.
    """

    def __init__(self, stock_adjuster: StockAdjuster, adjustment_timeout: float = 5.0):
        self.stock_adjuster = stock_adjuster
        self.adjustment_timeout = adjustment_timeout

    @staticmethod
    def validate_items(items: Sequence[OrderItemCreate]):
        if not items:
            raise InvalidRequest("Order must contain items")
        for position, item in enumerate(items):
            if item.quantity <= 0:
                raise InvalidRequest(f"Item {position}: quantity must be positive")
            if item.price < 0:
                raise InvalidRequest(f"Item {position}: price must not be negative")
            if item.price > MAX_AMOUNT or item.price.normalize().as_tuple().exponent < -2:
                raise InvalidRequest(f"Item {position}: price must have at most 8 digits and 2 decimal places")

    @staticmethod
    def compute_total(items: Sequence[OrderItemCreate]) -> Decimal:
        return sum((item.price * item.quantity for item in items), Decimal("0"))

    async def create_order(self, db: AsyncSession, items: Sequence[OrderItemCreate]) -> Order:
        self.validate_items(items)
        total = self.compute_total(items)
        if total > MAX_AMOUNT:
            raise InvalidRequest(f"Order total must not exceed {MAX_AMOUNT}")

        started = time.perf_counter()
        order = Order(
            total_amount=total,
            status=PENDING,
            items=[
                OrderItem(product_id=item.product_id, quantity=item.quantity, price=item.price)
                for item in items
            ],
        )
        try:
            order = await OrderRepository.create_order(db, order)
        except SQLAlchemyError as e:
            logger.error("order_commit_failed", items=len(items), error=str(e))
            raise StorageError("Failed to record order") from e

        ecomm_orders_created_total.inc()
        logger.info("order_created", order_id=order.id, total_amount=str(total), items=len(items))

        await self.adjust_inventory(order.id, items)
        # Only committed orders are timed, stock adjustments included
        ecomm_order_creation_duration_seconds.observe(time.perf_counter() - started)
        return order

    async def adjust_inventory(self, order_id: int, items: Sequence[OrderItemCreate]) -> int:
        """Issue one adjustment per item, in order. Returns how many failed."""
        failures = 0
        for item in items:
            log = logger.bind(order_id=order_id, product_id=item.product_id, quantity=item.quantity)
            try:
                await asyncio.wait_for(
                    self.stock_adjuster.adjust_stock(item.product_id, item.quantity),
                    timeout=self.adjustment_timeout,
                )
            except asyncio.TimeoutError:
                failures += 1
                ecomm_stock_adjustment_total.labels(status="timeout").inc()
                log.warning("stock_adjustment_timed_out", timeout=self.adjustment_timeout)
            except UpstreamAdjustmentError as e:
                failures += 1
                ecomm_stock_adjustment_total.labels(status="failed").inc()
                log.warning("stock_adjustment_failed", error=e.reason, product_not_found=e.not_found)
            except Exception as e:
                # Any other adjuster fault must not block the remaining items
                failures += 1
                ecomm_stock_adjustment_total.labels(status="failed").inc()
                log.warning("stock_adjustment_failed", error=repr(e))
            else:
                ecomm_stock_adjustment_total.labels(status="success").inc()

        if failures:
            logger.warning(
                "order_stock_out_of_sync",
                order_id=order_id,
                failed_adjustments=failures,
                total_adjustments=len(items),
            )
        return failures

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int) -> Order:
        order = await OrderRepository.get_order(db, order_id)
        if not order:
            raise NotFound("Order not found")
        return order

    @staticmethod
    async def list_orders(db: AsyncSession):
        return await OrderRepository.list_orders(db)

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, status: str) -> Order:
        # Any status is accepted verbatim; there is no transition graph
        order = await OrderRepository.update_status(db, order_id, OrderStatus(status))
        if not order:
            raise NotFound("Order not found")
        logger.info("order_status_updated", order_id=order_id, status=str(order.status))
        return order
