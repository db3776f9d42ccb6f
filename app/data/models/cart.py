#app/data/models/cart.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.utils.settings import shop_config


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    #jeden koszyk na email, pilnuje tego baza a nie tylko serwis
    email = Column(String, nullable=False, unique=True, index=True)

    payment_option = Column(String, nullable=False, default=shop_config.default_payment_option)
    version = Column(Integer, nullable=False, default=1)

    cart_items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )
