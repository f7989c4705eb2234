# shopzone/celery_worker.py
from celery import Celery

from shopzone.utils import settings

celery_app = Celery(
    "shopzone",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
)

# tasks must be imported explicitly so the worker registers them
celery_app.conf.imports = (
    "shopzone.tasks.expire",
    "shopzone.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "purge-sessions-every-hour": {
        "task": "shopzone.tasks.expire.purge_sessions_task",
        "schedule": 3600.0,
    },
}

celery_app.conf.timezone = "UTC"
celery_app.conf.task_always_eager = settings.CELERY_TASK_ALWAYS_EAGER
