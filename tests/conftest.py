"""Pytest configuration and fixtures"""
import os

# baza w pamieci zamiast postgresa, ustawione przed importem app.*
os.environ["DATABASE_URL"] = "sqlite://"

from contextlib import contextmanager
from decimal import Decimal
from unittest.mock import Mock

import pytest

from app.data.database import Base, engine, SessionLocal
from app.data.models import UserModel
from app.domain.errors import ConflictError
from app.domain.schemas import ProductSnapshot
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.utils.settings import shop_config


class FakeCatalog:
    """Katalog w pamieci z tym samym kontraktem co ProductClient."""

    def __init__(self, products):
        self.products = {p.id: p for p in products}
        self.calls = []

    def find_by_id(self, product_id):
        self.calls.append(product_id)
        return self.products.get(product_id)


class InMemoryLockService:
    """Lock per email bez Redisa; zajety lock -> ConflictError od razu."""

    def __init__(self):
        self.held = set()
        self.acquired = []

    @contextmanager
    def user_lock(self, email):
        if email in self.held:
            raise ConflictError("Another operation on this cart is in progress, try again")
        self.held.add(email)
        self.acquired.append(email)
        try:
            yield
        finally:
            self.held.discard(email)


@pytest.fixture
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(tables):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def products():
    return [
        ProductSnapshot(id="p-book", name="ReactJS Book", category="Books", cost=Decimal("10"), rating=4),
        ProductSnapshot(id="p-pen", name="Gel Pen", category="Stationery", cost=Decimal("5"), rating=3),
        ProductSnapshot(id="p-phone", name="Phone Case", category="Mobiles", cost=Decimal("100"), rating=5),
        ProductSnapshot(id="p-tv", name="Smart TV", category="Electronics", cost=Decimal("1000"), rating=4),
    ]


@pytest.fixture
def catalog(products):
    return FakeCatalog(products)


@pytest.fixture
def lock_service():
    return InMemoryLockService()


@pytest.fixture
def notifier():
    return Mock()


@pytest.fixture
def make_user(db):
    def _make_user(email="crio-user@gmail.com", wallet_money=Decimal("500"), address=None):
        user = UserModel(
            name="crio-user",
            email=email,
            password="not-a-real-hash",
            wallet_money=wallet_money,
            address=address or shop_config.default_address,
            version=1,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def user_with_address(make_user):
    return make_user(address="128 Summer Street, Boston, MA 02110")


@pytest.fixture
def cart_service(db, catalog, lock_service):
    return CartService(db=db, product_client=catalog, lock_service=lock_service)


@pytest.fixture
def checkout_service(db, lock_service, notifier):
    return CheckoutService(db=db, lock_service=lock_service, notification_service=notifier)
