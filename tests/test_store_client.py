"""
Tests for the hosted product table client.

The requests session is replaced with a mock, so no network access happens.
"""

import json
from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from freshtrack.inventory.models import ProductDraft
from freshtrack.store.client import ProductStoreClient, ProductStoreError


def _row(**overrides):
    row = {
        "id": "p1",
        "name": "Milk",
        "category": "Dairy Products",
        "barcode": None,
        "expiry_date": "2024-01-10",
        "purchase_date": "2024-01-04",
        "price": 50,
        "quantity": 3,
        "supplier": None,
        "alert_days": 7,
        "created_at": "2024-01-04T10:00:00+00:00",
        "updated_at": "2024-01-04T10:00:00+00:00",
    }
    row.update(overrides)
    return row


def _response(body=None, status=200, reason="OK"):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.reason = reason
    resp.content = b"" if body is None else json.dumps(body).encode()
    if body is None:
        resp.json.side_effect = ValueError("no body")
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def client():
    c = ProductStoreClient("https://demo.supabase.co/", "anon-key")
    c._session = MagicMock()
    return c


def _call(client, index=-1):
    """(method, params, json, headers) of a recorded request."""
    args, kwargs = client._session.request.call_args_list[index]
    return args[0], kwargs.get("params"), kwargs.get("json"), kwargs.get("headers")


class TestSetup:
    """Tests for client construction."""

    def test_headers_and_url(self):
        c = ProductStoreClient("https://demo.supabase.co/", "anon-key", table="stock")
        assert c.table_url == "https://demo.supabase.co/rest/v1/stock"
        assert c._session.headers["apikey"] == "anon-key"
        assert c._session.headers["Authorization"] == "Bearer anon-key"
        c.close()

    def test_url_and_timeout_passed(self, client):
        client._session.request.return_value = _response([])
        client.get_all_products()
        args, kwargs = client._session.request.call_args
        assert args[1] == "https://demo.supabase.co/rest/v1/products"
        assert kwargs["timeout"] == 10


class TestReads:
    """Tests for the query operations."""

    def test_get_all_products(self, client):
        client._session.request.return_value = _response([_row(), _row(id="p2", name="Curd")])
        products = client.get_all_products()
        assert [p.name for p in products] == ["Milk", "Curd"]
        assert products[0].expiry_date == date(2024, 1, 10)
        method, params, _, _ = _call(client)
        assert method == "GET"
        assert params == {"select": "*", "order": "expiry_date.asc"}

    def test_get_products_by_category(self, client):
        client._session.request.return_value = _response([_row()])
        client.get_products_by_category("Dairy Products")
        _, params, _, _ = _call(client)
        assert params["category"] == "eq.Dairy Products"

    def test_expiring_uses_each_products_alert_days(self, client):
        client._session.request.return_value = _response([
            _row(id="a", expiry_date="2024-01-05", alert_days=7),   # today
            _row(id="b", expiry_date="2024-01-08", alert_days=3),   # edge of window
            _row(id="c", expiry_date="2024-01-09", alert_days=3),   # outside
            _row(id="d", expiry_date="2024-01-20", alert_days=30),  # long lead time
        ])
        products = client.get_expiring_products(date(2024, 1, 5))
        assert [p.id for p in products] == ["a", "b", "d"]
        _, params, _, _ = _call(client)
        assert params["expiry_date"] == "gte.2024-01-05"

    def test_expired(self, client):
        client._session.request.return_value = _response([_row(expiry_date="2024-01-01")])
        products = client.get_expired_products(date(2024, 1, 5))
        assert len(products) == 1
        _, params, _, _ = _call(client)
        assert params["expiry_date"] == "lt.2024-01-05"
        assert params["order"] == "expiry_date.desc"

    def test_low_stock(self, client):
        client._session.request.return_value = _response([])
        client.get_low_stock_products()
        _, params, _, _ = _call(client)
        assert params["quantity"] == "lte.5"
        assert params["order"] == "quantity.asc"

        client.get_low_stock_products(threshold=2)
        _, params, _, _ = _call(client)
        assert params["quantity"] == "lte.2"

    def test_search(self, client):
        client._session.request.return_value = _response([_row()])
        client.search_products(" milk ")
        _, params, _, _ = _call(client)
        assert params["or"] == (
            '(name.ilike."*milk*",barcode.ilike."*milk*",supplier.ilike."*milk*")'
        )

    def test_search_quotes_reserved_characters(self, client):
        client._session.request.return_value = _response([])
        client.search_products('a,b "c"')
        _, params, _, _ = _call(client)
        assert 'name.ilike."*a,b \\"c\\"*"' in params["or"]

    def test_empty_search_makes_no_request(self, client):
        assert client.search_products("   ") == []
        client._session.request.assert_not_called()

    def test_barcode_found(self, client):
        client._session.request.return_value = _response([_row(barcode="8901030123456")])
        product = client.get_product_by_barcode("8901030123456")
        assert product.barcode == "8901030123456"
        _, params, _, _ = _call(client)
        assert params["barcode"] == "eq.8901030123456"
        assert params["limit"] == "1"

    def test_barcode_missing(self, client):
        client._session.request.return_value = _response([])
        assert client.get_product_by_barcode("000") is None


class TestWrites:
    """Tests for create, update and delete."""

    def _draft(self):
        return ProductDraft(
            name="Milk", category="Dairy Products",
            expiry_date=date(2024, 1, 10), purchase_date=date(2024, 1, 4),
            price=50, quantity=3,
        )

    def test_create(self, client):
        client._session.request.return_value = _response([_row()], status=201)
        product = client.create_product(self._draft())
        assert product.id == "p1"
        method, _, body, headers = _call(client)
        assert method == "POST"
        assert body[0]["expiry_date"] == "2024-01-10"
        assert body[0]["barcode"] is None
        assert headers == {"Prefer": "return=representation"}

    def test_bulk_create(self, client):
        client._session.request.return_value = _response(
            [_row(), _row(id="p2", name="Curd")], status=201
        )
        created = client.bulk_create_products([self._draft(), self._draft()])
        assert len(created) == 2
        _, _, body, _ = _call(client)
        assert len(body) == 2

    def test_bulk_create_empty(self, client):
        assert client.bulk_create_products([]) == []
        client._session.request.assert_not_called()

    def test_update(self, client):
        client._session.request.return_value = _response([_row(price=45)])
        product = client.update_product("p1", {"price": 45, "expiry_date": date(2024, 2, 1)})
        assert product.price == 45
        method, params, body, _ = _call(client)
        assert method == "PATCH"
        assert params == {"id": "eq.p1"}
        assert body == {"price": 45, "expiry_date": "2024-02-01"}

    def test_update_missing_row(self, client):
        client._session.request.return_value = _response([])
        assert client.update_product("nope", {"quantity": 1}) is None

    def test_update_rejects_identity_fields(self, client):
        with pytest.raises(ValueError, match="cannot update: created_at, id"):
            client.update_product("p1", {"id": "x", "created_at": "now"})
        client._session.request.assert_not_called()

    def test_delete(self, client):
        client._session.request.return_value = _response(None, status=204, reason="No Content")
        assert client.delete_product("p1") is True
        method, params, _, _ = _call(client)
        assert method == "DELETE"
        assert params == {"id": "eq.p1"}


class TestErrors:
    """Tests for error reporting."""

    def test_store_error_body(self, client):
        client._session.request.return_value = _response(
            {"code": "23514", "message": "new row violates check constraint"},
            status=400, reason="Bad Request",
        )
        with pytest.raises(ProductStoreError) as excinfo:
            client.create_product(TestWrites()._draft())
        assert excinfo.value.code == "23514"
        assert "check constraint" in str(excinfo.value)

    def test_http_error_without_body(self, client):
        client._session.request.return_value = _response(None, status=503, reason="Service Unavailable")
        with pytest.raises(ProductStoreError) as excinfo:
            client.get_all_products()
        assert excinfo.value.code == "503"
        assert excinfo.value.message == "Service Unavailable"

    def test_network_error(self, client):
        client._session.request.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(ProductStoreError) as excinfo:
            client.get_all_products()
        assert excinfo.value.code == "network"

    def test_non_json_success_body(self, client, caplog):
        resp = _response([_row()])
        resp.content = b"<html>maintenance</html>"
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        client._session.request.return_value = resp
        with pytest.raises(ProductStoreError) as excinfo:
            client.get_all_products()
        assert excinfo.value.code == "invalid_response"
        assert "get_all_products failed" in caplog.text

    def test_failure_is_logged(self, client, caplog):
        client._session.request.return_value = _response(None, status=500, reason="Server Error")
        with pytest.raises(ProductStoreError):
            client.get_expired_products(date(2024, 1, 5))
        assert "get_expired_products failed" in caplog.text
