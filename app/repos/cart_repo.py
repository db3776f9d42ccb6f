# app/repos/cart_repo.py
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel


class CartRepo:
    """
    Dostep do koszykow. Repo nie commituje samo (poza create_cart),
    transakcje zamyka serwis przez commit()/rollback().
    """

    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_email(self, email: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.email == email)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        #IntegrityError (drugi koszyk dla emaila) idzie wyzej, serwis decyduje co dalej
        self.db.add(cart)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(cart)
        return cart

    def get_cart_item(self, cart_id: int, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    #operacje na kolekcji relacji, delete-orphan usuwa wiersze przy flush
    def add_cart_item(self, cart: CartModel, item: CartItemModel) -> None:
        cart.cart_items.append(item)
        self.db.flush()

    def update_cart_item(self, item: CartItemModel, quantity: int) -> None:
        #flush od razu, wiersz cart_items zapisany przed version w carts
        item.quantity = quantity
        self.db.flush()

    def delete_cart_item(self, cart: CartModel, item: CartItemModel) -> None:
        cart.cart_items.remove(item)
        self.db.flush()

    def clear_cart_items(self, cart: CartModel) -> int:
        removed = len(cart.cart_items)
        cart.cart_items.clear()
        self.db.flush()
        return removed

    def update_cart_version(self, cart_id: int, old_version: int, new_data: dict) -> int:
        #optimistic locking: update set version=v+1 where id=.. and version=v
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def refresh(self, cart: CartModel) -> CartModel:
        self.db.refresh(cart)
        return cart

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
