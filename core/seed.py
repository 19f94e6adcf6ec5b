"""
Sample data for local development. Enabled with SEED_DATA=true.
"""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from models.order import Order, OrderStatus
from models.order_product import OrderProduct
from models.product import Product
from models.user import User

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {"username": "johndoe", "email": "john.doe@example.com", "first_name": "John", "last_name": "Doe"},
    {"username": "janedoe", "email": "jane.doe@example.com", "first_name": "Jane", "last_name": "Doe"},
]

SAMPLE_PRODUCTS = [
    {"name": "Laptop", "description": "High-performance laptop", "price": Decimal("999.99"),
     "stock_quantity": 50, "category": "Electronics"},
    {"name": "Mouse", "description": "Wireless mouse", "price": Decimal("29.99"),
     "stock_quantity": 200, "category": "Electronics"},
    {"name": "Desk Chair", "description": "Ergonomic office chair", "price": Decimal("249.99"),
     "stock_quantity": 30, "category": "Furniture"},
]


def seed_database(db: Session) -> bool:
    """Insert sample rows unless users already exist. Returns True if rows were added."""
    if db.query(User.id).first() is not None:
        logger.info("Skipping seed data, database already has users")
        return False

    users = [User(**row) for row in SAMPLE_USERS]
    products = [Product(**row) for row in SAMPLE_PRODUCTS]
    db.add_all(users + products)
    db.flush()

    laptop, mouse = products[0], products[1]
    order = Order(
        user_id=users[0].id,
        total_amount=laptop.price + mouse.price,
        status=OrderStatus.PENDING,
        product_links=[OrderProduct(product_id=laptop.id), OrderProduct(product_id=mouse.id)],
    )
    db.add(order)
    db.commit()
    logger.info("Sample data initialized: %d users, %d products, 1 order", len(users), len(products))
    return True
