from sqlalchemy import Column, ForeignKey, JSON, Numeric, String
from sqlalchemy.orm import relationship

from shopzone.data.database import Base
from shopzone.data.models._mixins import created_at_column, id_column, updated_at_column
from shopzone.domain.order_status import PENDING


class OrderModel(Base):
    __tablename__ = "orders"

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    status = Column(String(20), nullable=False, default=PENDING, index=True)

    subtotal = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False, default=0)
    shipping = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")

    shipping_address = Column(JSON, nullable=False)
    payment_method = Column(String(255), nullable=False)

    created_at = created_at_column()
    updated_at = updated_at_column()

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.created_at",
    )
