from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base


class OrderProduct(Base):
    """Join row: the order includes the product. No quantity, set membership only."""

    __tablename__ = "order_products"

    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", name="fk_order", ondelete="CASCADE"), primary_key=True
    )
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", name="fk_product"), primary_key=True, index=True
    )

    order = relationship("Order", back_populates="product_links")
    product = relationship("Product")
