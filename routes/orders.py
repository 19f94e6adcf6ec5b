from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from core.db import MAX_DB_INT, get_db
from core.pagination import PageRequest, page_request
from models.order import OrderStatus
from schemas.common import Page, PathId
from schemas.order import CustomerRevenueOut, OrderCreate, OrderOut
from services import orders as order_service

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=Page[OrderOut], summary="Get all orders")
def list_orders(
    user_id: Optional[int] = Query(None, alias="userId", ge=1, le=MAX_DB_INT),
    status: Optional[OrderStatus] = Query(None),
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    return order_service.filter_orders(db, page, user_id=user_id, status=status)


@router.get("/filter", response_model=Page[OrderOut], summary="Filter orders by user and/or status")
def filter_orders(
    user_id: Optional[int] = Query(None, alias="userId", ge=1, le=MAX_DB_INT),
    status: Optional[OrderStatus] = Query(None),
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    return order_service.filter_orders(db, page, user_id=user_id, status=status)


@router.get("/user/{user_id}", response_model=Page[OrderOut], summary="Get orders by user")
def list_user_orders(user_id: PathId, page: PageRequest = Depends(page_request), db: Session = Depends(get_db)):
    return order_service.list_orders_for_user(db, user_id, page)


@router.get(
    "/customer/{customer_id}/revenue",
    response_model=List[CustomerRevenueOut],
    summary="Get total revenue per year for a customer",
)
def customer_revenue(customer_id: PathId, db: Session = Depends(get_db)):
    return order_service.customer_revenue_per_year(db, customer_id)


@router.get("/{order_id}", response_model=OrderOut, summary="Get order by ID")
def get_order(order_id: PathId, db: Session = Depends(get_db)):
    return order_service.get_order(db, order_id)


@router.post("", response_model=OrderOut, status_code=201, summary="Create order")
def create_order(data: OrderCreate, db: Session = Depends(get_db)):
    return order_service.create_order(db, data.user_id, data.product_ids, status=data.status)


@router.patch("/{order_id}/status", response_model=OrderOut, summary="Update order status")
def update_order_status(order_id: PathId, status: OrderStatus = Query(...), db: Session = Depends(get_db)):
    return order_service.update_order_status(db, order_id, status)


@router.delete("/{order_id}", status_code=204, response_class=Response, summary="Delete order")
def delete_order(order_id: PathId, db: Session = Depends(get_db)):
    order_service.delete_order(db, order_id)
    return Response(status_code=204)
