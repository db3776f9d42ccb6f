"""Tests for API endpoints"""
from decimal import Decimal
from unittest.mock import Mock, patch

import pytest
import requests
from fastapi.testclient import TestClient

from app.api.deps import get_lock_service, get_notification_service, get_product_client
from app.main import app
from app.services.product_client import ProductClient

ADDRESS = "128 Summer Street, Boston, MA 02110"


@pytest.fixture
def client(tables, catalog, lock_service):
    app.dependency_overrides[get_product_client] = lambda: catalog
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notification_service] = lambda: Mock()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_id(client):
    response = client.post("/users/", json={
        "name": "crio-user",
        "email": "crio-user@gmail.com",
        "password": "learnwithcrio1",
    })
    assert response.status_code == 201
    return response.json()["id"]


def _set_address(client, user_id):
    response = client.put(f"/users/{user_id}/address", json={"address": ADDRESS})
    assert response.status_code == 200


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestUsers:

    def test_create_user_hides_password(self, client, user_id):
        response = client.get(f"/users/{user_id}")

        assert response.status_code == 200
        body = response.json()
        assert "password" not in body
        assert Decimal(body["wallet_money"]) == Decimal("500")
        assert body["address"] == "ADDRESS_NOT_SET"

    def test_duplicate_email(self, client, user_id):
        response = client.post("/users/", json={
            "name": "other",
            "email": "CRIO-USER@gmail.com",
            "password": "learnwithcrio1",
        })

        assert response.status_code == 409
        assert response.json() == {"message": "Email already taken"}

    def test_unknown_user(self, client, tables):
        response = client.get("/users/404")

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}

    def test_address_query(self, client, user_id):
        _set_address(client, user_id)

        response = client.get(f"/users/{user_id}", params={"q": "address"})

        assert response.json() == {"id": user_id, "email": "crio-user@gmail.com", "address": ADDRESS}

    def test_short_address_rejected(self, client, user_id):
        response = client.put(f"/users/{user_id}/address", json={"address": "too short"})

        assert response.status_code == 422

    def test_create_with_short_address_rejected(self, client, tables):
        response = client.post("/users/", json={
            "name": "crio-user",
            "email": "crio-user@gmail.com",
            "password": "learnwithcrio1",
            "address": "abc",
        })

        assert response.status_code == 422

    def test_login(self, client, user_id):
        response = client.post("/users/login", json={
            "email": "CRIO-USER@gmail.com",
            "password": "learnwithcrio1",
        })

        assert response.status_code == 200
        assert response.json()["id"] == user_id
        assert "password" not in response.json()

    def test_login_wrong_password(self, client, user_id):
        response = client.post("/users/login", json={
            "email": "crio-user@gmail.com",
            "password": "wrongpass1",
        })

        assert response.status_code == 400
        assert response.json() == {"message": "Incorrect email or password"}


class TestCart:

    def test_get_cart_without_cart(self, client, user_id):
        response = client.get("/cart/", params={"user_id": user_id})

        assert response.status_code == 404
        assert response.json() == {"message": "User does not have a cart"}

    def test_add_and_get(self, client, user_id):
        response = client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 2})

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "crio-user@gmail.com"
        assert body["payment_option"] == "PAYMENT_OPTION_DEFAULT"
        assert body["cart_items"][0]["quantity"] == 2
        assert body["cart_items"][0]["product"]["id"] == "p-book"

        assert client.get("/cart/", params={"user_id": user_id}).json() == body

    def test_add_duplicate(self, client, user_id):
        client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 1})

        response = client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 1})

        assert response.status_code == 409
        assert response.json()["message"].startswith("Product already in cart")

    def test_add_unknown_product(self, client, user_id):
        response = client.post("/cart/", params={"user_id": user_id}, json={"product_id": "nope", "quantity": 1})

        assert response.status_code == 400
        assert response.json() == {"message": "Product doesn't exist in database"}

    @patch("app.services.product_client.requests.get")
    def test_add_with_catalog_down(self, mock_get, client, user_id):
        mock_get.side_effect = requests.ConnectionError("connection refused")
        app.dependency_overrides[get_product_client] = lambda: ProductClient(base_url="http://catalog")

        response = client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 1})

        assert response.status_code == 500
        assert response.json() == {"message": "Product service unavailable"}
        assert client.get("/cart/", params={"user_id": user_id}).status_code == 404

    def test_add_zero_quantity_is_validation_error(self, client, user_id):
        response = client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 0})

        assert response.status_code == 422

    def test_update_quantity(self, client, user_id):
        client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 1})

        response = client.put("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 5})

        assert response.status_code == 200
        assert response.json()["cart_items"][0]["quantity"] == 5

    def test_update_not_in_cart(self, client, user_id):
        client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 1})

        response = client.put("/cart/", params={"user_id": user_id}, json={"product_id": "p-pen", "quantity": 5})

        assert response.status_code == 400
        assert response.json() == {"message": "Product not in cart"}

    def test_update_to_zero_removes(self, client, user_id):
        client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 1})

        response = client.put("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 0})

        assert response.status_code == 204
        assert client.get("/cart/", params={"user_id": user_id}).json()["cart_items"] == []

    def test_delete_item(self, client, user_id):
        client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-book", "quantity": 1})

        response = client.delete("/cart/items/p-book", params={"user_id": user_id})

        assert response.status_code == 204
        assert client.get("/cart/", params={"user_id": user_id}).json()["cart_items"] == []


class TestCheckout:

    def test_checkout_flow(self, client, user_id):
        _set_address(client, user_id)
        client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-phone", "quantity": 2})

        response = client.put("/cart/checkout", params={"user_id": user_id})

        assert response.status_code == 204
        assert Decimal(client.get(f"/users/{user_id}").json()["wallet_money"]) == Decimal("300")
        assert client.get("/cart/", params={"user_id": user_id}).json()["cart_items"] == []

    def test_checkout_without_address(self, client, user_id):
        client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-phone", "quantity": 2})

        response = client.put("/cart/checkout", params={"user_id": user_id})

        assert response.status_code == 400
        assert response.json() == {"message": "Address is not set"}

    def test_checkout_insufficient_balance(self, client, user_id):
        _set_address(client, user_id)
        client.post("/cart/", params={"user_id": user_id}, json={"product_id": "p-tv", "quantity": 1})

        response = client.put("/cart/checkout", params={"user_id": user_id})

        assert response.status_code == 400
        assert response.json() == {"message": "Insufficient balance"}
        assert Decimal(client.get(f"/users/{user_id}").json()["wallet_money"]) == Decimal("500")
