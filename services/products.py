import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from core.db import commit_or_raise
from core.errors import InvalidArgumentError, NotFoundError
from core.pagination import LIKE_ESCAPE, PageRequest, like_pattern, paginate
from models.order_product import OrderProduct
from models.product import Product
from schemas.product import ProductIn

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "id": Product.id,
    "name": Product.name,
    "price": Product.price,
    "stockQuantity": Product.stock_quantity,
    "category": Product.category,
    "createdAt": Product.created_at,
}


def _get_product(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError.for_resource("Product", product_id)
    return product


def _in_use(db: Session, product_id: int) -> bool:
    return db.query(OrderProduct).filter(OrderProduct.product_id == product_id).first() is not None


def list_products(db: Session, page: PageRequest) -> Dict[str, Any]:
    return paginate(db.query(Product), page, SORTABLE_FIELDS, tiebreak=Product.id)


def search_products(db: Session, term: str, page: PageRequest) -> Dict[str, Any]:
    pattern = like_pattern(term)
    query = db.query(Product).filter(
        or_(
            Product.name.ilike(pattern, escape=LIKE_ESCAPE),
            Product.description.ilike(pattern, escape=LIKE_ESCAPE),
            Product.category.ilike(pattern, escape=LIKE_ESCAPE),
        )
    )
    return paginate(query, page, SORTABLE_FIELDS, tiebreak=Product.id)


def filter_products(
    db: Session,
    page: PageRequest,
    category: Optional[str] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
) -> Dict[str, Any]:
    if min_price is not None and max_price is not None and min_price > max_price:
        raise InvalidArgumentError("minPrice must not be greater than maxPrice")

    query = db.query(Product)
    if category is not None:
        query = query.filter(Product.category == category)
    if min_price is not None:
        query = query.filter(Product.price >= min_price)
    if max_price is not None:
        query = query.filter(Product.price <= max_price)
    return paginate(query, page, SORTABLE_FIELDS, tiebreak=Product.id)


def get_product(db: Session, product_id: int) -> Product:
    return _get_product(db, product_id)


def create_product(db: Session, data: ProductIn) -> Product:
    product = Product(
        name=data.name,
        description=data.description,
        price=data.price,
        stock_quantity=data.stock_quantity,
        category=data.category,
    )
    db.add(product)
    commit_or_raise(db, InvalidArgumentError("Product rejected by the database"))
    db.refresh(product)
    logger.info("Created product %s (%s)", product.id, product.name)
    return product


def update_product(db: Session, product_id: int, data: ProductIn) -> Product:
    product = _get_product(db, product_id)
    product.name = data.name
    product.description = data.description
    product.price = data.price
    product.stock_quantity = data.stock_quantity
    product.category = data.category
    commit_or_raise(db, InvalidArgumentError(f"Product {product_id} update rejected by the database"))
    db.refresh(product)
    logger.info("Updated product %s", product_id)
    return product


def delete_product(db: Session, product_id: int) -> None:
    product = _get_product(db, product_id)
    if _in_use(db, product_id):
        raise InvalidArgumentError(f"Product {product_id} is referenced by an order and cannot be deleted")
    db.delete(product)
    commit_or_raise(db, InvalidArgumentError(f"Product {product_id} is referenced by an order and cannot be deleted"))
    logger.info("Deleted product %s", product_id)
