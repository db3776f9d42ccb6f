from sqlalchemy import Column, Integer, ForeignKey, Numeric, String, Float, UniqueConstraint
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.domain.schemas import ProductSnapshot


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False)

    #snapshot produktu z momentu dodania, katalog nie jest juz potem czytany
    product_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    cost = Column(Numeric(12, 2), nullable=False)
    rating = Column(Float, nullable=True)
    image = Column(String, nullable=True)

    cart = relationship("CartModel", back_populates="cart_items")

    __table_args__ = (UniqueConstraint("cart_id", "product_id", name="u_cart_product"),)

    @property
    def product(self) -> ProductSnapshot:
        return ProductSnapshot(
            id=self.product_id,
            name=self.name,
            category=self.category,
            cost=self.cost,
            rating=self.rating,
            image=self.image,
        )

    @classmethod
    def from_product(cls, product: ProductSnapshot, quantity: int) -> "CartItemModel":
        return cls(
            product_id=product.id,
            name=product.name,
            category=product.category,
            cost=product.cost,
            rating=product.rating,
            image=product.image,
            quantity=quantity,
        )
