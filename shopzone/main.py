# shopzone/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from shopzone.api import include_routers
from shopzone.api.errors import register_exception_handlers
from shopzone.data.database import Database
from shopzone.services.lock_service import LockService
from shopzone.services.notification_service import NotificationService
from shopzone.utils import settings
from shopzone.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(
    database_url: str | None = None,
    lock_service: LockService | None = None,
    notification_service: NotificationService | None = None,
    secret_key: str | None = None,
    create_tables: bool = True,
) -> FastAPI:
    """
    Build the application and its long-lived collaborators once.
    Everything request handlers need hangs off app.state and is injected
    through shopzone.api.deps.
    """
    configure_logging(settings.LOG_LEVEL)

    # fail fast: no silent fallback secret outside development/test
    resolved_secret = settings.get_secret_key(secret_key=secret_key)

    database = Database(database_url or settings.DATABASE_URL)
    if create_tables:
        database.create_all()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        database.dispose()

    app = FastAPI(
        title="ShopZone",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.db = database
    app.state.secret_key = resolved_secret
    app.state.lock_service = lock_service or LockService(settings.REDIS_URL)
    app.state.notification_service = notification_service or NotificationService()

    register_exception_handlers(app)
    include_routers(app)

    logger.info(f"ShopZone started (env={settings.APP_ENV})")
    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
