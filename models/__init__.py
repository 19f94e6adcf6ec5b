# Import models so that SQLAlchemy metadata includes them on app startup
from .user import User  # noqa: F401
from .product import Product  # noqa: F401
from .order import Order, OrderStatus  # noqa: F401
from .order_product import OrderProduct  # noqa: F401
