from sqlalchemy import CheckConstraint, Column, Integer, JSON, Numeric, String, Text

from shopzone.data.database import Base
from shopzone.data.models._mixins import created_at_column, id_column, updated_at_column


class ProductModel(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    id = id_column()
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=False, index=True)

    image = Column(String(500), nullable=True)
    images = Column(JSON, nullable=True)

    stock = Column(Integer, nullable=False, default=0)

    created_at = created_at_column()
    updated_at = updated_at_column()

    def snapshot(self) -> dict:
        """Frozen copy stored on an order item."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "category": self.category,
            "image": self.image,
        }
