"""
RemoteStore — the backend as seen by the client.

Every call is lazy: nothing goes over the wire until the result is awaited.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Protocol

from lonja._types import LazyCoroResult
from lonja.domain import (
    ItemKind,
    Product,
    Combo,
    SaleRequest,
    SaleRecord,
    DailyTotals,
)
from lonja.remote._types import RemoteError


class RemoteStore(Protocol):
    """
    Inventory + sales backend.

    The store is authoritative for prices, stock and sale totals.
    """

    def list_active_products(self) -> LazyCoroResult[list[Product], RemoteError]: ...

    def list_active_combos(self) -> LazyCoroResult[list[Combo], RemoteError]: ...

    def has_stock(
        self,
        kind: ItemKind,
        item_id: int,
        quantity: Decimal,
    ) -> LazyCoroResult[bool, RemoteError]:
        """True when available quantity >= requested quantity."""
        ...

    def create_sale(self, request: SaleRequest) -> LazyCoroResult[SaleRecord, RemoteError]: ...

    def list_sales(self, start: date, end: date) -> LazyCoroResult[list[SaleRecord], RemoteError]:
        """Sales with a sale date within [start, end], both inclusive."""
        ...

    def daily_totals(self, day: date) -> LazyCoroResult[DailyTotals, RemoteError]: ...


__all__ = ("RemoteStore",)
