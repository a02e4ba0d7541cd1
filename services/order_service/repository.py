from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from .models import Order
from .status import OrderStatus

class OrderRepository:
    @staticmethod
    async def create_order(db: AsyncSession, order: Order):
        """Insert the order header and all of its items as one unit.

        The transaction is scoped to this call: it commits when every insert
        succeeded and rolls back on any exception, which then propagates.
        The session must not already be inside a transaction.
        """
        async with db.begin():
            db.add(order)
            await db.flush()
        return order

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int):
        result = await db.execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()

    @staticmethod
    async def list_orders(db: AsyncSession):
        # Newest first; id breaks ties between orders created in the same instant
        result = await db.execute(select(Order).order_by(Order.created_at.desc(), Order.id.desc()))
        return result.scalars().all()

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, status: OrderStatus):
        result = await db.execute(select(Order).where(Order.id == order_id))
        order = result.scalars().first()

        if not order:
            return None

        order.status = status

        await db.commit()
        await db.refresh(order)
        return order
