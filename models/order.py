import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, ForeignKey, Numeric, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", name="fk_user"), index=True)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    # Stored as the member name in a plain VARCHAR column
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, native_enum=False, length=255, validate_strings=True),
        default=OrderStatus.PENDING,
        index=True,
    )
    created_at: Mapped[datetime | None] = mapped_column(DateTime, default=datetime.utcnow, nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=True
    )

    user = relationship("User", back_populates="orders")
    product_links = relationship(
        "OrderProduct",
        cascade="all, delete-orphan",
        back_populates="order",
        order_by="OrderProduct.product_id",
    )

    @property
    def product_ids(self) -> list[int]:
        return [link.product_id for link in self.product_links]
