"""
Hosted product table client

Thin wrapper over the REST interface of the hosted table store
(PostgREST dialect, ``/rest/v1/<table>``). Rows come back as ``Product``;
filtering and ordering happen on the server.

Query syntax used here:
    ?category=eq.Dairy%20Products          equality
    ?expiry_date=gte.2024-01-05            range
    ?order=expiry_date.asc                 ordering
    ?or=(name.ilike."*milk*",...)          OR over case-insensitive patterns
"""

import logging
from datetime import date, timedelta
from typing import Any, Iterable, Optional

import requests

from freshtrack.inventory.models import Product, ProductDraft

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"

LOW_STOCK_THRESHOLD = 5

# Columns a caller may change after creation.
UPDATABLE_FIELDS = {
    "name", "category", "barcode", "expiry_date", "purchase_date",
    "price", "quantity", "supplier", "alert_days",
}


class ProductStoreError(Exception):
    """Store request failed"""
    def __init__(self, code: str, message: str = ""):
        self.code = code
        self.message = message
        super().__init__(f"Product store error [{code}]: {message}")


class ProductStoreClient:
    """Products table client"""

    def __init__(self, base_url: str, api_key: str, table: str = "products", timeout: float = 10):
        """
        Args:
            base_url: project URL, e.g. "https://abcd1234.supabase.co"
            api_key: project API key, sent as ``apikey`` and as Bearer token
            table: table holding the product rows
            timeout: seconds per request
        """
        self.base_url = base_url.rstrip("/")
        self.table = table
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    @property
    def table_url(self) -> str:
        return f"{self.base_url}{REST_PATH}/{self.table}"

    def _request(
        self,
        operation: str,
        method: str,
        params: Optional[dict] = None,
        json_body: Any = None,
        headers: Optional[dict] = None,
    ) -> list[dict]:
        logger.debug("%s: %s %s params=%s", operation, method, self.table_url, params)
        try:
            resp = self._session.request(
                method,
                self.table_url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("%s failed: %s", operation, e)
            raise ProductStoreError("network", str(e)) from e

        if not resp.ok:
            code, message = _error_details(resp)
            logger.error("%s failed: [%s] %s", operation, code, message)
            raise ProductStoreError(code, message)

        if not resp.content:
            return []
        try:
            data = resp.json()
        except ValueError as e:
            logger.error("%s failed: response is not JSON (HTTP %s)", operation, resp.status_code)
            raise ProductStoreError("invalid_response", f"response is not JSON: {e}") from e
        return data if isinstance(data, list) else [data]

    def _select(self, operation: str, params: dict) -> list[Product]:
        rows = self._request(operation, "GET", params={"select": "*", **params})
        return [Product.from_record(row) for row in rows]

    # ── create ──

    def create_product(self, draft: ProductDraft) -> Product:
        """Insert one product and return the stored row."""
        rows = self._request(
            "create_product", "POST",
            json_body=[draft.to_record()],
            headers={"Prefer": "return=representation"},
        )
        return Product.from_record(rows[0])

    def bulk_create_products(self, drafts: Iterable[ProductDraft]) -> list[Product]:
        """Insert a batch in one request (used by CSV import)."""
        records = [d.to_record() for d in drafts]
        if not records:
            return []
        rows = self._request(
            "bulk_create_products", "POST",
            json_body=records,
            headers={"Prefer": "return=representation"},
        )
        return [Product.from_record(row) for row in rows]

    # ── read ──

    def get_all_products(self) -> list[Product]:
        return self._select("get_all_products", {"order": "expiry_date.asc"})

    def get_products_by_category(self, category: str) -> list[Product]:
        return self._select("get_products_by_category", {
            "category": f"eq.{category}",
            "order": "expiry_date.asc",
        })

    def get_expiring_products(self, today: date) -> list[Product]:
        """Not yet expired and inside each product's own alert window.

        Args:
            today: reference day

        Returns:
            products with today <= expiry_date <= today + alert_days
        """
        products = self._select("get_expiring_products", {
            "expiry_date": f"gte.{today.isoformat()}",
            "order": "expiry_date.asc",
        })
        return [
            p for p in products
            if p.expiry_date <= today + timedelta(days=p.alert_days)
        ]

    def get_expired_products(self, today: date) -> list[Product]:
        """Expired before ``today``, most recent first."""
        return self._select("get_expired_products", {
            "expiry_date": f"lt.{today.isoformat()}",
            "order": "expiry_date.desc",
        })

    def get_low_stock_products(self, threshold: int = LOW_STOCK_THRESHOLD) -> list[Product]:
        return self._select("get_low_stock_products", {
            "quantity": f"lte.{threshold}",
            "order": "quantity.asc",
        })

    def search_products(self, query: str) -> list[Product]:
        """Case-insensitive substring search over name, barcode and supplier."""
        query = query.strip()
        if not query:
            return []
        pattern = _quote(f"*{query}*")
        return self._select("search_products", {
            "or": f"(name.ilike.{pattern},barcode.ilike.{pattern},supplier.ilike.{pattern})",
            "order": "expiry_date.asc",
        })

    def get_product_by_barcode(self, barcode: str) -> Optional[Product]:
        """Exact barcode lookup; None when no product carries it."""
        products = self._select("get_product_by_barcode", {
            "barcode": f"eq.{barcode}",
            "limit": "1",
        })
        return products[0] if products else None

    # ── update / delete ──

    def update_product(self, product_id: str, updates: dict[str, Any]) -> Optional[Product]:
        """Apply a partial update.

        Args:
            product_id: id assigned by the store
            updates: column -> new value; dates may be ``date`` objects

        Returns:
            the updated Product, or None if no row has this id

        Raises:
            ValueError: a column that cannot be updated
            ProductStoreError: request failed
        """
        unknown = set(updates) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"cannot update: {', '.join(sorted(unknown))}")

        body = {
            key: value.isoformat() if isinstance(value, date) else value
            for key, value in updates.items()
        }
        rows = self._request(
            "update_product", "PATCH",
            params={"id": f"eq.{product_id}"},
            json_body=body,
            headers={"Prefer": "return=representation"},
        )
        return Product.from_record(rows[0]) if rows else None

    def delete_product(self, product_id: str) -> bool:
        self._request("delete_product", "DELETE", params={"id": f"eq.{product_id}"})
        return True

    def close(self):
        self._session.close()


def _quote(value: str) -> str:
    """Double-quote a filter value so commas and parentheses stay literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _error_details(resp: requests.Response) -> tuple[str, str]:
    """(code, message) from an error response body, else the HTTP status."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        code = body.get("code") or str(resp.status_code)
        message = body.get("message") or body.get("error") or resp.reason or ""
        return str(code), str(message)
    return str(resp.status_code), resp.reason or ""
