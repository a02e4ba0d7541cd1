from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text, func
from shared.config.database import Base

PRODUCT_SCHEMA = "product_schema"


def utcnow():
    return datetime.now(timezone.utc)


class Product(Base):
    __tablename__ = "products"
    __table_args__ = {"schema": PRODUCT_SCHEMA}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    # No floor: orders may drive this below zero
    stock = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
