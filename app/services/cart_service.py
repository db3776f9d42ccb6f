from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.models.user import UserModel
from app.domain.errors import ConflictError, InternalError, InvalidInputError, NotFoundError
from app.repos.cart_repo import CartRepo
from app.services.product_client import ProductClient
from app.services.lock_service import LockService
from app.utils.settings import ShopConfig, shop_config
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Prosta implementacja cqrs dla domeny cart
    commands (add, update, remove) modyfikuja stan i podbijaja version
    query (get) tylko odczyt
    """

    def __init__(
        self,
        db: Session,
        product_client: ProductClient,
        lock_service: LockService,
        config: ShopConfig = shop_config,
    ):
        self.repo = CartRepo(db)
        self.product_client = product_client
        self.lock_service = lock_service
        self.config = config

    #query - odczyt
    def get_cart(self, user: UserModel) -> CartModel:
        cart = self.repo.get_cart_by_email(user.email)

        if not cart:
            raise NotFoundError("User does not have a cart")

        return cart

    #commands
    def add_product(self, user: UserModel, product_id: str, quantity: int) -> CartModel:
        _check_quantity(quantity)

        #lock na usera: dwa rownolegle add nie moga zalozyc dwoch koszykow
        with self.lock_service.user_lock(user.email):
            cart = self.repo.get_cart_by_email(user.email)

            if cart and self.repo.get_cart_item(cart.id, product_id):
                raise ConflictError(
                    "Product already in cart. Use the cart sidebar to update or remove product from cart"
                )

            logger.info(f"Pobieranie danych produktu {product_id} z product-service")
            product = self.product_client.find_by_id(product_id)

            if product is None:
                raise InvalidInputError("Product doesn't exist in database")

            item = CartItemModel.from_product(product, quantity)

            #koszyk powstaje dopiero razem z pierwsza poprawna pozycja
            if not cart:
                return self._create_cart(user.email, item)

            try:
                self.repo.add_cart_item(cart, item)
            except IntegrityError:
                # u_cart_product, ktos dodal ten sam produkt miedzy odczytem a zapisem
                self.repo.rollback()
                raise ConflictError(
                    "Product already in cart. Use the cart sidebar to update or remove product from cart"
                )

            self._bump_version(cart)

            logger.info(f"Dodano produkt {product_id} (x{quantity}) do koszyka {cart.id}")

            return cart

    def update_product(self, user: UserModel, product_id: str, quantity: int) -> CartModel:
        _check_quantity(quantity)

        cart = self.repo.get_cart_by_email(user.email)

        if not cart:
            raise InvalidInputError("User does not have a cart. Use POST to create cart and add a product")

        if self.product_client.find_by_id(product_id) is None:
            raise InvalidInputError("Product doesn't exist in database")

        item = self.repo.get_cart_item(cart.id, product_id)

        if not item:
            raise InvalidInputError("Product not in cart")

        logger.info(
            f"Zmiana ilosci produktu {product_id} w koszyku {cart.id} "
            f"z {item.quantity} na {quantity}"
        )
        #tylko quantity, snapshot produktu zostaje jak byl
        self.repo.update_cart_item(item, quantity)
        self._bump_version(cart)

        return cart

    def remove_product(self, user: UserModel, product_id: str) -> None:
        cart = self.repo.get_cart_by_email(user.email)

        if not cart:
            raise InvalidInputError("User does not have a cart")

        item = self.repo.get_cart_item(cart.id, product_id)

        if not item:
            raise InvalidInputError("Product not in cart")

        logger.info(f"Usuwanie produktu {product_id} z koszyka {cart.id}")

        self.repo.delete_cart_item(cart, item)
        self._bump_version(cart)

    def _create_cart(self, email: str, first_item: CartItemModel) -> CartModel:
        try:
            created = self.repo.create_cart(
                CartModel(
                    email=email,
                    payment_option=self.config.default_payment_option,
                    version=1,
                    cart_items=[first_item],
                )
            )
        except IntegrityError:
            logger.error(f"Drugi koszyk dla {email} odrzucony przez baze")
            raise InternalError("User cart creation failed because user already have a cart")

        logger.info(f"Utworzono nowy koszyk {created.id} dla {email}")
        return created

    def _bump_version(self, cart: CartModel) -> None:
        # Optimistic locking warunek na wersje
        # np w bazie update set version 2 where id 1 and version 1
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={"version": cart.version + 1},
        )

        if rowcount == 0:
            self.repo.rollback()
            logger.warning(f"Konflikt wersji koszyka {cart.id}")
            raise ConflictError("Cart was modified by another operation, try again")

        self.repo.commit()
        self.repo.refresh(cart)


def _check_quantity(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
        raise InvalidInputError("Quantity must be a positive integer")
