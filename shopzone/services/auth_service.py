# shopzone/services/auth_service.py
"""
Password hashing and bearer sessions.

Passwords: bcrypt with a per-password salt; the cost comes from BCRYPT_ROUNDS.

Sessions: the client gets a random url-safe token once. The database only
keeps HMAC-SHA256(SECRET_KEY, token), so a leaked table cannot be replayed.
A session is valid until expires_at (SESSION_TTL_DAYS) or until revoked
(logout, password change).
"""
import hashlib
import hmac
import secrets
from datetime import timedelta
from functools import lru_cache

import bcrypt
from sqlalchemy.orm import Session

from shopzone.data.models.session_token import SessionTokenModel
from shopzone.data.models.user import UserModel
from shopzone.domain.errors import NotAuthenticated
from shopzone.repos.session_repo import SessionRepo
from shopzone.repos.user_repo import UserRepo
from shopzone.utils import settings
from shopzone.utils.logging import get_logger
from shopzone.utils.time_utils import utcnow

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes; longer inputs are rejected
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed hash or over-long password
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash checked for unknown emails so a miss costs the same as a wrong password."""
    return hash_password(secrets.token_urlsafe(16))


def generate_token() -> str:
    return secrets.token_urlsafe(32)


def hash_token(token: str, secret_key: str) -> str:
    return hmac.new(
        secret_key.encode("utf-8"),
        token.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


class AuthService:
    def __init__(self, db: Session, secret_key: str, ttl_days: int | None = None):
        self.db = db
        self.secret_key = secret_key
        self.ttl = timedelta(days=ttl_days or settings.SESSION_TTL_DAYS)
        self.sessions = SessionRepo(db)
        self.users = UserRepo(db)

    def issue_token(self, user: UserModel) -> str:
        """Create a session for `user`. The caller commits."""
        token = generate_token()
        now = utcnow()
        self.sessions.add_session(
            SessionTokenModel(
                user_id=user.id,
                token_hash=hash_token(token, self.secret_key),
                expires_at=now + self.ttl,
            )
        )
        return token

    def authenticate(self, token: str | None) -> UserModel:
        """Resolve a bearer token to an active user or raise NotAuthenticated."""
        if not token:
            raise NotAuthenticated()

        session = self.sessions.get_active(hash_token(token, self.secret_key), utcnow())
        if not session:
            raise NotAuthenticated("Session is invalid or has expired")

        user = self.users.get_user(session.user_id)
        if not user or not user.is_active:
            raise NotAuthenticated("Account is not active")

        return user

    def logout(self, token: str) -> bool:
        revoked = self.sessions.revoke(hash_token(token, self.secret_key), utcnow())
        self.db.commit()
        return bool(revoked)

    def revoke_other_sessions(self, user_id: str, keep_token: str | None = None) -> int:
        """Revoke every session of a user except `keep_token`. The caller commits."""
        keep_hash = hash_token(keep_token, self.secret_key) if keep_token else None
        return self.sessions.revoke_all_for_user(user_id, utcnow(), keep_hash=keep_hash)
