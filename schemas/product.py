from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.common import CamelModel, Money


class ProductIn(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    price: Money = Field(ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(ge=0)
    category: Optional[str] = Field(default=None, max_length=50)


class ProductOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Money
    stock_quantity: int
    category: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
