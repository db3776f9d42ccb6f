#app/api/routers/carts.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.deps import (
    get_current_user,
    get_lock_service,
    get_notification_service,
    get_product_client,
)
from app.data.database import get_db
from app.data.models.user import UserModel
from app.domain.schemas import CartOut, ItemIn, ItemUpdateIn
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService
from app.services.product_client import ProductClient

router = APIRouter(prefix="/cart", tags=["cart"])


def get_cart_service(
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
    lock_service: LockService = Depends(get_lock_service),
) -> CartService:
    return CartService(db=db, product_client=product_client, lock_service=lock_service)


def get_checkout_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> CheckoutService:
    return CheckoutService(db=db, lock_service=lock_service, notification_service=notification_service)


@router.get("/", response_model=CartOut)
def get_cart(
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    return svc.get_cart(user)


@router.post("/", response_model=CartOut, status_code=201)
def add_item(
    payload: ItemIn,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    return svc.add_product(user, payload.product_id, payload.quantity)


@router.put("/", response_model=CartOut)
def update_item(
    payload: ItemUpdateIn,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    #quantity 0 = usuniecie produktu
    if payload.quantity == 0:
        svc.remove_product(user, payload.product_id)
        return Response(status_code=204)
    return svc.update_product(user, payload.product_id, payload.quantity)


@router.delete("/items/{product_id}", status_code=204)
def remove_item(
    product_id: str,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    svc.remove_product(user, product_id)
    return Response(status_code=204)


@router.put("/checkout", status_code=204)
def checkout(
    user: UserModel = Depends(get_current_user),
    svc: CheckoutService = Depends(get_checkout_service),
):
    svc.checkout(user)
    return Response(status_code=204)
