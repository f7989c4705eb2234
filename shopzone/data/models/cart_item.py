from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, UniqueConstraint

from shopzone.data.database import Base
from shopzone.data.models._mixins import created_at_column, id_column, updated_at_column


class CartItemModel(Base):
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_cart_items_user_product"),
        CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
    )

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # no FK: a deleted product leaves an orphan that get_cart heals
    product_id = Column(String(36), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)

    created_at = created_at_column()
    updated_at = updated_at_column()
