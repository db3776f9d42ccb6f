# app/services/checkout_service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.user import UserModel
from app.domain.errors import ConflictError, InternalError, InvalidInputError, NotFoundError
from app.repos.cart_repo import CartRepo
from app.repos.user_repo import UserRepo
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService
from app.services.pricing import compute_total
from app.utils.settings import ShopConfig, shop_config
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Checkout koszyka: walidacja -> total -> obciazenie portfela -> pusty koszyk.

    Obciazenie portfela i czyszczenie koszyka ida w jednej transakcji,
    oba zapisy z warunkiem na version. Blad w polowie = rollback calosci,
    nigdy portfel obciazony przy pelnym koszyku.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        notification_service: NotificationService,
        config: ShopConfig = shop_config,
    ):
        self.cart_repo = CartRepo(db)
        self.user_repo = UserRepo(db)
        self.lock_service = lock_service
        self.notification_service = notification_service
        self.config = config

    def checkout(self, user: UserModel) -> None:
        #jeden checkout na usera naraz, inaczej dwa moga przejsc sprawdzenie salda
        with self.lock_service.user_lock(user.email):
            cart = self.cart_repo.get_cart_by_email(user.email)

            if not cart:
                raise NotFoundError("User does not have a cart")

            if not cart.cart_items:
                raise InvalidInputError("User does not have items in the cart")

            # swiezy stan usera (FOR UPDATE), nie ten z poczatku requestu
            current = self.user_repo.get_user_by_email_for_update(user.email)

            if not current:
                raise NotFoundError("User not found")

            if not self.has_set_non_default_address(current):
                raise InvalidInputError("Address is not set")

            total = compute_total(cart.cart_items)

            if total > current.wallet_money:
                raise InvalidInputError("Insufficient balance")

            logger.info(f"Checkout koszyka {cart.id} dla {user.email}, total {total}")

            self._commit_checkout(current, cart, total)

        try:
            self.notification_service.send_checkout_notification(user.email, total)
        except Exception as e:
            # checkout juz zacommitowany, brak powiadomienia go nie cofa
            logger.warning(f"Failed to queue checkout notification for {user.email}: {e}")

    def has_set_non_default_address(self, user: UserModel) -> bool:
        return user.address != self.config.default_address

    def _commit_checkout(self, user: UserModel, cart, total) -> None:
        try:
            # najpierw portfel, potem koszyk, commit dopiero po obu
            rowcount = self.user_repo.update_wallet(
                user_id=user.id,
                old_version=user.version,
                wallet_money=user.wallet_money - total,
            )
            if rowcount == 0:
                raise ConflictError("User was modified by another operation, try again")

            self.cart_repo.clear_cart_items(cart)

            rowcount = self.cart_repo.update_cart_version(
                cart_id=cart.id,
                old_version=cart.version,
                new_data={"version": cart.version + 1},
            )
            if rowcount == 0:
                raise ConflictError("Cart was modified by another operation, try again")

            self.cart_repo.commit()
        except ConflictError:
            self.cart_repo.rollback()
            logger.warning(f"Checkout dla {user.email} przegral wyscig o wersje, rollback")
            raise
        except SQLAlchemyError as e:
            self.cart_repo.rollback()
            logger.error(f"Checkout dla {user.email} nie zapisany, rollback: {e}")
            raise InternalError("Checkout failed, no changes were applied") from e

        self.cart_repo.refresh(cart)
        self.user_repo.refresh(user)
