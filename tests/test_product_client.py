"""
Tests for ProductClient (requests mocked)
"""
from decimal import Decimal
from unittest.mock import Mock, patch

import pytest
import requests

from app.domain.errors import InternalError
from app.services.product_client import ProductClient


def _response(status_code, json_data=None):
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = json_data
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(response=resp)
    return resp


@patch("app.services.product_client.requests.get")
def test_find_by_id_returns_product(mock_get):
    mock_get.return_value = _response(200, {
        "id": "p-book", "name": "ReactJS Book", "category": "Books", "cost": 24, "rating": 4,
    })

    product = ProductClient(base_url="http://catalog/").find_by_id("p-book")

    assert product.id == "p-book"
    assert product.cost == Decimal("24")
    mock_get.assert_called_once_with("http://catalog/products/p-book", timeout=2)


@patch("app.services.product_client.requests.get")
def test_find_by_id_missing_product(mock_get):
    mock_get.return_value = _response(404)

    assert ProductClient(base_url="http://catalog").find_by_id("nope") is None
    assert mock_get.call_count == 1


@patch("app.services.product_client.requests.get")
def test_client_error_is_not_retried(mock_get):
    mock_get.return_value = _response(400)

    with pytest.raises(InternalError) as exc:
        ProductClient(base_url="http://catalog").find_by_id("bad id")

    assert isinstance(exc.value.__cause__, requests.HTTPError)
    assert mock_get.call_count == 1


@patch("app.services.product_client.requests.get")
def test_server_error_retried_then_internal_error(mock_get):
    mock_get.return_value = _response(503)

    with pytest.raises(InternalError) as exc:
        ProductClient(base_url="http://catalog").find_by_id("p-book")

    assert exc.value.message == "Product service unavailable"
    assert mock_get.call_count == 3


@patch("app.services.product_client.requests.get")
def test_catalog_down_is_internal_error(mock_get):
    mock_get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(InternalError):
        ProductClient(base_url="http://catalog").find_by_id("p-book")

    assert mock_get.call_count == 3


@patch("app.services.product_client.requests.get")
def test_recovers_after_timeout(mock_get):
    mock_get.side_effect = [
        requests.Timeout("slow"),
        _response(200, {"id": "p-pen", "name": "Gel Pen", "cost": "5.50"}),
    ]

    product = ProductClient(base_url="http://catalog").find_by_id("p-pen")

    assert product.cost == Decimal("5.50")
