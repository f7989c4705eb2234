from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from shopzone.data.database import Base
from shopzone.data.models._mixins import created_at_column, id_column, updated_at_column

ROLE_CUSTOMER = "customer"
ROLE_ADMIN = "admin"


class UserModel(Base):
    __tablename__ = "users"

    id = id_column()
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    phone = Column(String(32), nullable=True)

    role = Column(String(16), nullable=False, default=ROLE_CUSTOMER)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = created_at_column()
    updated_at = updated_at_column()

    addresses = relationship("AddressModel", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
