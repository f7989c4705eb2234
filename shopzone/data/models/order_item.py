from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, JSON, Numeric, String
from sqlalchemy.orm import relationship

from shopzone.data.database import Base
from shopzone.data.models._mixins import created_at_column, id_column


class OrderItemModel(Base):
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
    )

    id = id_column()
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    # plain column: history survives product deletion
    product_id = Column(String(36), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    product_snapshot = Column(JSON, nullable=False)

    created_at = created_at_column()

    order = relationship("OrderModel", back_populates="items")
