# shopzone/utils/settings.py
import os
from dotenv import load_dotenv

from shopzone.utils.logging import get_logger

load_dotenv()

logger = get_logger(__name__)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


APP_ENV = os.getenv("APP_ENV", "development").strip().lower()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./shopzone.sqlite3")
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL)
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/2")
CELERY_TASK_ALWAYS_EAGER = _env_bool("CELERY_TASK_ALWAYS_EAGER")

SECRET_KEY = os.getenv("SECRET_KEY")
SESSION_TTL_DAYS = int(os.getenv("SESSION_TTL_DAYS", 7))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))
CHECKOUT_LOCK_TTL_SECONDS = int(os.getenv("CHECKOUT_LOCK_TTL_SECONDS", 30))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")

# only ever used when APP_ENV allows it
_DEV_SECRET_KEY = "shopzone-dev-secret-not-for-production"
_INSECURE_ENVS = ("development", "test")


def get_secret_key(app_env: str | None = None, secret_key: str | None = None) -> str:
    """
    Return the key used to hash session tokens.

    Outside development/test a missing SECRET_KEY is a startup error.
    """
    env = (app_env or APP_ENV).strip().lower()
    key = secret_key if secret_key is not None else SECRET_KEY

    if key:
        return key

    if env not in _INSECURE_ENVS:
        raise RuntimeError(
            f"SECRET_KEY must be set when APP_ENV={env!r}"
        )

    logger.warning(f"SECRET_KEY not set, using the development key (APP_ENV={env})")
    return _DEV_SECRET_KEY
