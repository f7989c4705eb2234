# shopzone/tasks/expire.py
from datetime import datetime

from sqlalchemy.orm import Session

from shopzone.celery_worker import celery_app
from shopzone.data.database import Database
from shopzone.repos.session_repo import SessionRepo
from shopzone.utils import settings
from shopzone.utils.logging import get_logger
from shopzone.utils.time_utils import utcnow

logger = get_logger(__name__)


def purge_expired_sessions(db: Session, now: datetime | None = None) -> int:
    """Delete sessions that are expired or revoked. Returns the number removed."""
    removed = SessionRepo(db).purge(now or utcnow())
    db.commit()
    return removed


@celery_app.task(name="shopzone.tasks.expire.purge_sessions_task")
def purge_sessions_task():
    logger.info("Purge sessions task started")

    database = Database(settings.DATABASE_URL)
    try:
        with database.session() as db:
            removed = purge_expired_sessions(db)
        logger.info(f"Purged {removed} expired/revoked session(s)")
        return removed
    finally:
        database.dispose()
