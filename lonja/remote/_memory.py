"""
MemoryStore — in-process backend simulation.

Behaves like the REST backend where the client can observe it:
prices are recomputed server-side, stock is re-validated and deducted
on every sale, sales are stamped with the store clock.

    store = MemoryStore(products=[...], combos=[...])
    store.fail_next(RemoteError(RemoteErrorKind.TIMEOUT, "boom"), "create_sale")
"""

from __future__ import annotations

import asyncio
import itertools
from collections import Counter, defaultdict
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

from kungfu import Ok, Error, LazyCoroResult, Result

from lonja._types import round_money
from lonja.domain import (
    ItemKind,
    Product,
    Combo,
    SaleRequest,
    SaleDetail,
    SaleRecord,
    DailyTotals,
)
from lonja.remote._types import RemoteError, RemoteErrorKind


class MemoryStore:
    """RemoteStore kept in dictionaries. One event loop, no locking needed."""

    def __init__(
        self,
        products: Iterable[Product] = (),
        combos: Iterable[Combo] = (),
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.products: dict[int, Product] = {p.id: p for p in products}
        self.combos: dict[int, Combo] = {c.id: c for c in combos}
        self.sales: list[SaleRecord] = []
        self.calls: Counter[str] = Counter()
        self._clock = clock
        self._ids = itertools.count(1)
        self._failures: dict[str, list[RemoteError]] = defaultdict(list)

    # ───────────────────────────────────────────────────────────────────────
    # Test controls
    # ───────────────────────────────────────────────────────────────────────

    def fail_next(self, error: RemoteError, operation: str) -> None:
        """Queue an error for the next call to ``operation``."""
        self._failures[operation].append(error)

    def add_sale(self, record: SaleRecord) -> None:
        """Seed a historical sale."""
        self.sales.append(record)

    def _lazy[T](self, operation: str, fn: Callable[[], Result[T, RemoteError]]) -> LazyCoroResult[T, RemoteError]:
        async def run() -> Result[T, RemoteError]:
            self.calls[operation] += 1
            await asyncio.sleep(0)
            if self._failures[operation]:
                return Error(self._failures[operation].pop(0))
            return fn()
        return LazyCoroResult(run)

    # ───────────────────────────────────────────────────────────────────────
    # Catalog
    # ───────────────────────────────────────────────────────────────────────

    def list_active_products(self) -> LazyCoroResult[list[Product], RemoteError]:
        return self._lazy(
            "list_active_products",
            lambda: Ok([p for p in self.products.values() if p.active]),
        )

    def list_active_combos(self) -> LazyCoroResult[list[Combo], RemoteError]:
        return self._lazy(
            "list_active_combos",
            lambda: Ok([c for c in self.combos.values() if c.active]),
        )

    # ───────────────────────────────────────────────────────────────────────
    # Stock
    # ───────────────────────────────────────────────────────────────────────

    def _required(self, kind: ItemKind, item_id: int, quantity: Decimal) -> Result[dict[int, Decimal], RemoteError]:
        """Pounds of each product needed to sell ``quantity`` of the item."""
        match kind:
            case ItemKind.PRODUCT:
                if item_id not in self.products:
                    return Error(_not_found("product", item_id))
                return Ok({item_id: quantity})
            case ItemKind.COMBO:
                combo = self.combos.get(item_id)
                if combo is None:
                    return Error(_not_found("combo", item_id))
                needed: dict[int, Decimal] = defaultdict(Decimal)
                for component in combo.components:
                    needed[component.product_id] += component.quantity_lb * quantity
                return Ok(dict(needed))

    def _covers(self, needed: dict[int, Decimal]) -> bool:
        for product_id, pounds in needed.items():
            product = self.products.get(product_id)
            if product is None or product.stock_lb < pounds:
                return False
        return True

    def has_stock(
        self,
        kind: ItemKind,
        item_id: int,
        quantity: Decimal,
    ) -> LazyCoroResult[bool, RemoteError]:
        return self._lazy(
            "has_stock",
            lambda: self._required(kind, item_id, quantity).map(self._covers),
        )

    # ───────────────────────────────────────────────────────────────────────
    # Sales
    # ───────────────────────────────────────────────────────────────────────

    def _price(self, kind: ItemKind, item_id: int) -> tuple[str, Decimal]:
        match kind:
            case ItemKind.PRODUCT:
                product = self.products[item_id]
                return product.name, product.price_per_lb
            case ItemKind.COMBO:
                combo = self.combos[item_id]
                return combo.name, combo.price

    def _create(self, request: SaleRequest) -> Result[SaleRecord, RemoteError]:
        if not request.customer.strip():
            return Error(RemoteError(RemoteErrorKind.REJECTED, "cliente es requerido", status=400))
        if not request.lines:
            return Error(RemoteError(RemoteErrorKind.REJECTED, "la venta no tiene items", status=400))

        needed: dict[int, Decimal] = defaultdict(Decimal)
        for line in request.lines:
            match self._required(line.kind, line.item_id, line.quantity):
                case Ok(required):
                    for product_id, pounds in required.items():
                        needed[product_id] += pounds
                case Error(e):
                    return Error(e)
        if not self._covers(needed):
            return Error(RemoteError(RemoteErrorKind.REJECTED, "stock insuficiente", status=409))

        for product_id, pounds in needed.items():
            product = self.products[product_id]
            self.products[product_id] = replace(product, stock_lb=product.stock_lb - pounds)

        details: list[SaleDetail] = []
        for line in request.lines:
            name, unit_price = self._price(line.kind, line.item_id)
            details.append(SaleDetail(
                kind=line.kind,
                item_id=line.item_id,
                name=name,
                quantity=line.quantity,
                unit_price=unit_price,
                subtotal=round_money(unit_price * line.quantity),
            ))

        record = SaleRecord(
            id=next(self._ids),
            customer=request.customer,
            total=round_money(sum((d.subtotal for d in details), Decimal(0))),
            sold_at=self._clock().isoformat(),
            notes=request.notes,
            details=tuple(details),
            type=request.type,
        )
        self.sales.append(record)
        return Ok(record)

    def create_sale(self, request: SaleRequest) -> LazyCoroResult[SaleRecord, RemoteError]:
        return self._lazy("create_sale", lambda: self._create(request))

    def _sale_day(self, record: SaleRecord) -> date | None:
        if record.sold_at is None:
            return None
        try:
            return datetime.fromisoformat(record.sold_at).date()
        except ValueError:
            return None

    def list_sales(self, start: date, end: date) -> LazyCoroResult[list[SaleRecord], RemoteError]:
        def select() -> Result[list[SaleRecord], RemoteError]:
            selected: list[SaleRecord] = []
            for record in self.sales:
                day = self._sale_day(record)
                # Backend returns undated rows too; the client decides what to skip
                if day is None or start <= day <= end:
                    selected.append(record)
            return Ok(selected)
        return self._lazy("list_sales", select)

    def daily_totals(self, day: date) -> LazyCoroResult[DailyTotals, RemoteError]:
        def totals() -> Result[DailyTotals, RemoteError]:
            todays = [s for s in self.sales if self._sale_day(s) == day]
            return Ok(DailyTotals(
                day=day,
                sale_count=len(todays),
                amount=sum((s.total for s in todays), Decimal(0)),
            ))
        return self._lazy("daily_totals", totals)


def _not_found(what: str, item_id: int) -> RemoteError:
    return RemoteError(RemoteErrorKind.REJECTED, f"{what} {item_id} not found", status=404)


__all__ = ("MemoryStore",)
