# shopzone/services/notification_service.py
from shopzone.celery_worker import celery_app
from shopzone.utils.logging import get_logger

logger = get_logger(__name__)

ORDER_PLACED = "order_placed"
ORDER_STATUS_CHANGED = "order_status_changed"


class NotificationService:
    """
    Sends order notifications.
    Uses Celery so the request never waits on delivery.
    """

    def send_order_notification(self, user_id: str, order_id: str, event: str, **extra) -> None:
        send_order_notification_task.delay(user_id, order_id, event, extra)


@celery_app.task(name="shopzone.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str, event: str, extra: dict | None = None):
    """
    Celery task. Email/SMS delivery is not part of this service, so the
    notification is only logged.
    """
    logger.info(f"[NOTIFICATION] user={user_id} order={order_id} event={event} {extra or {}}")
    return {"user_id": user_id, "order_id": order_id, "event": event, "status": "sent"}
