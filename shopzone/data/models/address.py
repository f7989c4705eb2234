from sqlalchemy import Boolean, Column, ForeignKey, String
from sqlalchemy.orm import relationship

from shopzone.data.database import Base
from shopzone.data.models._mixins import created_at_column, id_column, updated_at_column


class AddressModel(Base):
    __tablename__ = "addresses"

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    label = Column(String(50), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    company = Column(String(100), nullable=True)

    street = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    zip_code = Column(String(20), nullable=False)
    country = Column(String(100), nullable=False)
    phone = Column(String(32), nullable=True)

    is_default = Column(Boolean, nullable=False, default=False)

    created_at = created_at_column()
    updated_at = updated_at_column()

    user = relationship("UserModel", back_populates="addresses")
