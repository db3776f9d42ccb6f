# app/celery_worker.py
from celery import Celery

from app.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "shop",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAZNE: explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "app.services.notification_service",
)

celery_app.conf.timezone = "UTC"
