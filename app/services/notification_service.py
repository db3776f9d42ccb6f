# app/services/notification_service.py
from decimal import Decimal

from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_checkout_notification(email: str, total: Decimal):
        """
        Potwierdzenie zakupu, wysylane dopiero po commicie checkoutu.
        """
        send_checkout_notification_task.delay(email, str(total))


@celery_app.task(name="app.services.notification_service.send_checkout_notification_task")
def send_checkout_notification_task(email: str, total: str):
    """
    Celery task - w prawdziwym systemie wyslalby email z potwierdzeniem.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] {email}: checkout completed, charged {total}")

    return {"email": email, "total": total, "status": "sent"}
