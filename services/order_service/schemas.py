from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

# Amounts must fit the Numeric(10, 2) columns. Sign checks are left to the
# coordinator, which reports InvalidRequest naming the offending line.

class OrderItemCreate(BaseModel):
    product_id: int = Field(..., examples=[1])
    quantity: int = Field(..., examples=[2])
    price: Decimal = Field(..., max_digits=10, decimal_places=2, examples=["1299.99"])

class OrderCreate(BaseModel):
    items: List[OrderItemCreate]

class OrderItemResponse(BaseModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal

    class Config:
        from_attributes = True

class OrderResponse(BaseModel):
    id: int
    total_amount: Decimal
    status: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True

class OrderDetailResponse(OrderResponse):
    items: List[OrderItemResponse] = []

class StatusUpdate(BaseModel):
    # Free-form: no transition rules
    status: str = Field(..., examples=["shipped"])
