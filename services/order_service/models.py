from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, func
from sqlalchemy.orm import relationship
from shared.config.database import Base
from .status import PENDING, StatusType

ORDER_SCHEMA = "order_schema"


def utcnow():
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"
    # We use a separate schema to simulate microservice isolation
    __table_args__ = {"schema": ORDER_SCHEMA}

    id = Column(Integer, primary_key=True, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False) # calculated at creation, never recomputed
    status = Column(StatusType(), nullable=False, default=PENDING, server_default=str(PENDING))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    items = relationship(
        "OrderItem",
        back_populates="order",
        lazy="selectin",
        order_by="OrderItem.id",
        cascade="all, delete-orphan",
    )

class OrderItem(Base):
    __tablename__ = "order_items"
    __table_args__ = {"schema": ORDER_SCHEMA}

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey(f"{ORDER_SCHEMA}.orders.id"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False) # weak reference into the inventory service
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False) # unit price captured at order time

    order = relationship("Order", back_populates="items")
