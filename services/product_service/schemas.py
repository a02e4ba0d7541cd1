from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Laptop"])
    description: Optional[str] = Field(default=None, examples=["High-performance laptop"])
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, examples=["1299.99"])
    stock: int = Field(default=0, examples=[50])


class ProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    price: Decimal
    stock: int
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class StockUpdate(BaseModel):
    # Unconditional decrement; the sign is not checked
    quantity: int = Field(..., examples=[2])
