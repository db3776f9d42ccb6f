# app/api/deps.py
"""
Wspolne zaleznosci routerow. Klienci Redis/HTTP tworzeni raz (lru_cache),
w testach podmieniane przez app.dependency_overrides.
"""
from functools import lru_cache

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.data.models.user import UserModel
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService
from app.services.product_client import ProductClient
from app.services.user_service import UserService


@lru_cache
def get_lock_service() -> LockService:
    return LockService()


@lru_cache
def get_product_client() -> ProductClient:
    return ProductClient()


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_current_user(
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
) -> UserModel:
    #tokeny sa poza tym serwisem, user przychodzi jako user_id
    return UserService(db).get_user(user_id)
