from datetime import datetime
from typing import List, Optional

from pydantic import Field

from models.order import OrderStatus
from schemas.common import CamelModel, DbId, Money


class OrderCreate(CamelModel):
    user_id: Optional[DbId] = None
    product_ids: List[DbId] = Field(default_factory=list)
    status: Optional[OrderStatus] = None
    # Accepted for compatibility, the stored total is always computed from product prices
    total_amount: Optional[Money] = None


class OrderOut(CamelModel):
    id: int
    user_id: int
    product_ids: List[int]
    total_amount: Money
    status: OrderStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CustomerRevenueOut(CamelModel):
    customer_id: int
    year: int
    total_revenue: Money
