# shopzone/repos/session_repo.py
from datetime import datetime

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from shopzone.data.models.session_token import SessionTokenModel


class SessionRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_session(self, session: SessionTokenModel) -> SessionTokenModel:
        self.db.add(session)
        self.db.flush()
        return session

    def get_active(self, token_hash: str, now: datetime) -> SessionTokenModel | None:
        return self.db.execute(
            select(SessionTokenModel).where(
                SessionTokenModel.token_hash == token_hash,
                SessionTokenModel.revoked_at.is_(None),
                SessionTokenModel.expires_at > now,
            )
        ).scalar_one_or_none()

    def revoke(self, token_hash: str, now: datetime) -> int:
        result = self.db.execute(
            update(SessionTokenModel)
            .where(
                SessionTokenModel.token_hash == token_hash,
                SessionTokenModel.revoked_at.is_(None),
            )
            .values(revoked_at=now)
        )
        return result.rowcount

    def revoke_all_for_user(self, user_id: str, now: datetime, keep_hash: str | None = None) -> int:
        stmt = update(SessionTokenModel).where(
            SessionTokenModel.user_id == user_id,
            SessionTokenModel.revoked_at.is_(None),
        )
        if keep_hash:
            stmt = stmt.where(SessionTokenModel.token_hash != keep_hash)
        return self.db.execute(stmt.values(revoked_at=now)).rowcount

    def purge(self, now: datetime) -> int:
        result = self.db.execute(
            delete(SessionTokenModel).where(
                or_(
                    SessionTokenModel.expires_at <= now,
                    SessionTokenModel.revoked_at.is_not(None),
                )
            )
        )
        return result.rowcount
