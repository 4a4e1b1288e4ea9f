"""
Pytest configuration and fixtures for lonja.

Every test gets a fresh MemoryStore seeded with a small fish counter:
three products, one of them low on stock, and two combos.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from lonja.cart import Cart
from lonja.catalog import CatalogSnapshot
from lonja.checkout import Checkout
from lonja.config import Settings
from lonja.domain import Product, Combo, ComboComponent
from lonja.remote import MemoryStore
from lonja.stock import StockValidator

FIXED_NOW = datetime(2024, 3, 15, 10, 30)


@pytest.fixture
def shrimp():
    return Product(id=1, name="Camarón", price_per_lb=Decimal("8.50"), stock_lb=Decimal("20"))


@pytest.fixture
def tilapia():
    return Product(id=2, name="Tilapia", price_per_lb=Decimal("3.25"), stock_lb=Decimal("12"))


@pytest.fixture
def octopus():
    return Product(id=3, name="Pulpo", price_per_lb=Decimal("12.00"), stock_lb=Decimal("4"))


@pytest.fixture
def soup_combo():
    """1 lb shrimp + 2 lb tilapia for less than the parts."""
    return Combo(
        id=10,
        name="Combo Sopa",
        price=Decimal("13.00"),
        components=(
            ComboComponent(product_id=1, quantity_lb=Decimal("1")),
            ComboComponent(product_id=2, quantity_lb=Decimal("2")),
        ),
    )


@pytest.fixture
def ceviche_combo():
    """Needs 2 lb of octopus per unit; only two units fit in stock."""
    return Combo(
        id=11,
        name="Combo Ceviche",
        price=Decimal("30.00"),
        components=(
            ComboComponent(product_id=3, quantity_lb=Decimal("2")),
            ComboComponent(product_id=1, quantity_lb=Decimal("1")),
        ),
    )


@pytest.fixture
def store(shrimp, tilapia, octopus, soup_combo, ceviche_combo):
    return MemoryStore(
        products=[shrimp, tilapia, octopus],
        combos=[soup_combo, ceviche_combo],
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def catalog(store):
    return CatalogSnapshot(store)


@pytest.fixture
def validator(store):
    return StockValidator(store)


@pytest.fixture
def checkout(store, validator, catalog):
    return Checkout(store, validator, catalog)


@pytest.fixture
def cart():
    return Cart(customer="Rosa Méndez")


@pytest.fixture
def settings():
    return Settings(
        api_base_url="http://backend.test/api",
        low_stock_threshold_lb=Decimal("5"),
        _env_file=None,
    )
