"""
Domain — seafood market point of sale.

Products are sold by weight (pounds) at a price per pound.
Combos are fixed bundles of products sold by unit at a fixed price.
A sale references items by kind + id; the server owns prices and stock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import assert_never

from lonja._types import Money, Pounds, round_money


# ═══════════════════════════════════════════════════════════════════════════════
# Item Kind
# ═══════════════════════════════════════════════════════════════════════════════


class ItemKind(Enum):
    """What a line refers to. Values are the wire names."""

    PRODUCT = "Producto"
    COMBO = "Combo"


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Product:
    id: int
    name: str
    price_per_lb: Money
    stock_lb: Pounds
    active: bool = True
    packaging: str = ""

    @property
    def stock_value(self) -> Money:
        """Inventory value at list price."""
        return round_money(self.price_per_lb * self.stock_lb)


@dataclass(frozen=True, slots=True)
class ComboComponent:
    product_id: int
    quantity_lb: Pounds


@dataclass(frozen=True, slots=True)
class Combo:
    id: int
    name: str
    price: Money
    components: tuple[ComboComponent, ...] = ()
    active: bool = True
    description: str = ""


type Item = Product | Combo


def kind_of(item: Item) -> ItemKind:
    match item:
        case Product():
            return ItemKind.PRODUCT
        case Combo():
            return ItemKind.COMBO
        case _:
            assert_never(item)


def unit_price_of(item: Item) -> Money:
    """Price per pound for products, price per unit for combos."""
    match item:
        case Product(price_per_lb=price):
            return price
        case Combo(price=price):
            return price
        case _:
            assert_never(item)


# ═══════════════════════════════════════════════════════════════════════════════
# Sale Submission
# ═══════════════════════════════════════════════════════════════════════════════


class SaleType(Enum):
    NORMAL = "NORMAL"


@dataclass(frozen=True, slots=True)
class SaleRequestLine:
    kind: ItemKind
    item_id: int
    quantity: Decimal


@dataclass(frozen=True, slots=True)
class SaleRequest:
    """What the client sends. No prices: the server computes them."""

    customer: str
    lines: tuple[SaleRequestLine, ...]
    notes: str = ""
    type: SaleType = SaleType.NORMAL


# ═══════════════════════════════════════════════════════════════════════════════
# Sale Records
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SaleDetail:
    kind: ItemKind
    item_id: int
    name: str
    quantity: Decimal
    unit_price: Money
    subtotal: Money


@dataclass(frozen=True, slots=True)
class SaleRecord:
    """
    A sale as the server reports it.

    sold_at stays a raw string: the server is not consistent about
    timezone suffixes, so parsing happens where buckets are computed.
    """

    id: int
    customer: str
    total: Money
    sold_at: str | None = None
    notes: str = ""
    details: tuple[SaleDetail, ...] = field(default=())
    type: SaleType = SaleType.NORMAL


# ═══════════════════════════════════════════════════════════════════════════════
# Dashboard
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class DailyTotals:
    day: date
    sale_count: int
    amount: Money


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    day: date
    totals: DailyTotals
    low_stock: tuple[Product, ...]
    active_products: int


__all__ = (
    "ItemKind",
    "Product",
    "ComboComponent",
    "Combo",
    "Item",
    "kind_of",
    "unit_price_of",
    "SaleType",
    "SaleRequestLine",
    "SaleRequest",
    "SaleDetail",
    "SaleRecord",
    "DailyTotals",
    "DashboardSummary",
)
