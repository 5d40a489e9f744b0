"""Pytest configuration and shared fixtures."""

from datetime import date, timedelta

import pytest

from freshtrack.inventory.models import Product


@pytest.fixture
def today():
    """Fixed reference day used across tests."""
    return date(2024, 1, 5)


@pytest.fixture
def make_product(today):
    """Factory for products expiring a given number of days after ``today``."""
    counter = {"n": 0}

    def _make(name="Milk", days=5, price=50.0, quantity=3, **kwargs):
        counter["n"] += 1
        fields = dict(
            id=f"prod_{counter['n']}",
            name=name,
            category="Dairy Products",
            expiry_date=today + timedelta(days=days),
            purchase_date=today - timedelta(days=1),
            price=price,
            quantity=quantity,
        )
        fields.update(kwargs)
        return Product(**fields)

    return _make


@pytest.fixture
def sample_products(make_product):
    """One product in each status plus a second warning item."""
    return [
        make_product("Milk", days=5, price=50, quantity=3),
        make_product("Bread", days=-2, price=40, quantity=2, category="Food & Beverages"),
        make_product("Rice", days=60, price=120.5, quantity=10, category="Food & Beverages",
                     supplier="Agro Traders"),
        make_product("Paneer", days=0, price=90, quantity=1, barcode="8901030123456"),
    ]


ENV_VARS = [
    "SUPABASE_URL", "SUPABASE_KEY", "FRESHTRACK_TABLE",
    "FRESHTRACK_LOW_STOCK_THRESHOLD", "FRESHTRACK_TIMEOUT", "FRESHTRACK_LOG_LEVEL",
]


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """No freshtrack variables set, working directory in tmp_path."""
    # setenv first so that anything load_dotenv writes is undone afterwards
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
