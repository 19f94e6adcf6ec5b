import logging
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from core.errors import InvalidArgumentError, NotFoundError
from core.pagination import PageRequest, paginate
from models.order import Order, OrderStatus
from models.order_product import OrderProduct
from models.product import Product
from models.user import User

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "id": Order.id,
    "userId": Order.user_id,
    "totalAmount": Order.total_amount,
    "status": Order.status,
    "createdAt": Order.created_at,
    "updatedAt": Order.updated_at,
}

TWO_PLACES = Decimal("0.01")


def _to_decimal(value: float | int | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _get_order(db: Session, order_id: int) -> Order:
    order = db.get(Order, order_id)
    if order is None:
        raise NotFoundError.for_resource("Order", order_id)
    return order


def _ensure_user_exists(db: Session, user_id: int) -> None:
    if db.query(User.id).filter(User.id == user_id).one_or_none() is None:
        raise NotFoundError.for_resource("User", user_id)


def filter_orders(
    db: Session,
    page: PageRequest,
    user_id: Optional[int] = None,
    status: Optional[OrderStatus] = None,
) -> Dict[str, Any]:
    """Page through orders, narrowing only on the filters that were given."""
    query = db.query(Order).options(selectinload(Order.product_links))
    if user_id is not None:
        query = query.filter(Order.user_id == user_id)
    if status is not None:
        query = query.filter(Order.status == status)
    return paginate(query, page, SORTABLE_FIELDS, tiebreak=Order.id)


def list_orders_for_user(db: Session, user_id: int, page: PageRequest) -> Dict[str, Any]:
    return filter_orders(db, page, user_id=user_id)


def get_order(db: Session, order_id: int) -> Order:
    return _get_order(db, order_id)


def create_order(
    db: Session,
    user_id: Optional[int],
    product_ids: Iterable[int],
    status: Optional[OrderStatus] = None,
) -> Order:
    if user_id is None:
        raise InvalidArgumentError("User ID is required")
    # Set membership, duplicates collapse
    distinct_ids = list(dict.fromkeys(product_ids or []))
    if not distinct_ids:
        raise InvalidArgumentError("Product IDs are required")

    _ensure_user_exists(db, user_id)

    products = db.query(Product).filter(Product.id.in_(distinct_ids)).all()
    if len(products) != len(distinct_ids):
        found = {p.id for p in products}
        missing = [pid for pid in distinct_ids if pid not in found]
        raise NotFoundError(f"One or more products not found: {missing}")

    total = sum((_to_decimal(p.price) for p in products), Decimal("0.00"))
    order = Order(
        user_id=user_id,
        total_amount=total.quantize(TWO_PLACES),
        status=status or OrderStatus.PENDING,
    )
    order.product_links = [OrderProduct(product_id=pid) for pid in distinct_ids]

    try:
        db.add(order)
        db.commit()
    except IntegrityError as exc:
        # A user or product vanished between the checks above and the insert
        db.rollback()
        logger.warning("Order insert for user %s rejected by the database: %s", user_id, exc.orig)
        raise NotFoundError("Referenced user or product no longer exists") from exc

    db.refresh(order)
    logger.info("Created order %s for user %s with products %s", order.id, user_id, distinct_ids)
    return order


def update_order_status(db: Session, order_id: int, status: OrderStatus) -> Order:
    order = _get_order(db, order_id)
    previous = order.status
    order.status = status
    order.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(order)
    logger.info("Order %s status %s -> %s", order_id, previous.value, status.value)
    return order


def delete_order(db: Session, order_id: int) -> None:
    order = _get_order(db, order_id)
    db.delete(order)
    db.commit()
    logger.info("Deleted order %s", order_id)


def aggregate_revenue_by_year(rows: Iterable[Tuple[Optional[datetime], Decimal]]) -> List[Tuple[int, Decimal]]:
    """Sum amounts per calendar year of the timestamp, ascending by year.

    Rows without a timestamp cannot be placed in a year and are skipped.
    """
    totals: Dict[int, Decimal] = defaultdict(lambda: Decimal("0.00"))
    skipped = 0
    for created_at, amount in rows:
        if created_at is None:
            skipped += 1
            continue
        totals[created_at.year] += _to_decimal(amount)
    if skipped:
        logger.debug("Skipped %d orders without created_at in revenue aggregation", skipped)
    return [(year, totals[year].quantize(TWO_PLACES)) for year in sorted(totals)]


def customer_revenue_per_year(db: Session, customer_id: int) -> List[Dict[str, Any]]:
    _ensure_user_exists(db, customer_id)
    rows = (
        db.query(Order.created_at, Order.total_amount)
        .filter(Order.user_id == customer_id)
        .all()
    )
    return [
        {"customer_id": customer_id, "year": year, "total_revenue": total}
        for year, total in aggregate_revenue_by_year(rows)
    ]
