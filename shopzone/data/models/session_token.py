from sqlalchemy import Column, DateTime, ForeignKey, String

from shopzone.data.database import Base
from shopzone.data.models._mixins import created_at_column, id_column


class SessionTokenModel(Base):
    """
    Bearer session. Only a keyed hash of the token is stored; the plaintext
    goes to the client once, at register/login.
    """

    __tablename__ = "session_tokens"

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(String(64), nullable=False, unique=True, index=True)

    expires_at = Column(DateTime, nullable=False, index=True)
    revoked_at = Column(DateTime, nullable=True)

    created_at = created_at_column()
