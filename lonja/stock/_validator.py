"""
StockValidator — ask the store whether an item can be sold right now.

Always goes to the store; the catalog snapshot may be stale. Every check
is expressed as pounds per product: a combo draws on its components, and
a checkout pass adds up what all lines draw from each product.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import assert_never

import combinators as C
from kungfu import LazyCoroResult

from lonja.domain import Item, ItemKind, Product, Combo
from lonja.cart import LineItem
from lonja.remote import RemoteStore, RemoteError

logger = logging.getLogger(__name__)


def product_demand(item: Item, quantity: Decimal) -> dict[int, Decimal]:
    """Pounds of each product needed to sell ``quantity`` of ``item``."""
    match item:
        case Product(id=product_id):
            return {product_id: quantity}
        case Combo(components=components):
            demand: dict[int, Decimal] = defaultdict(Decimal)
            for component in components:
                demand[component.product_id] += component.quantity_lb * quantity
            return dict(demand)
        case _:
            assert_never(item)


class StockValidator:
    __slots__ = ("_store", "_concurrency")

    def __init__(self, store: RemoteStore, *, concurrency: int = 10) -> None:
        self._store = store
        self._concurrency = concurrency

    def _short_products(self, demand: Mapping[int, Decimal]) -> LazyCoroResult[set[int], RemoteError]:
        products = list(demand.items())

        def collect(results: list[bool]) -> set[int]:
            return {product_id for (product_id, _), ok in zip(products, results, strict=True) if not ok}

        return C.traverse_par(
            products,
            lambda entry: self._store.has_stock(ItemKind.PRODUCT, entry[0], entry[1]),
            concurrency=self._concurrency,
        ).map(collect)

    def has_stock(self, item: Item, quantity: Decimal) -> LazyCoroResult[bool, RemoteError]:
        """
        True when the store holds at least ``quantity`` of ``item``.

        A combo passes only if every product it draws on covers the
        summed pounds (component pounds times combo units).
        """
        return self._short_products(product_demand(item, quantity)).map(lambda short: not short)

    def first_short(self, lines: Sequence[LineItem]) -> LazyCoroResult[LineItem | None, RemoteError]:
        """
        Check what the whole cart draws from each product, concurrently.

        Returns the first line, in cart order, that draws on a product the
        store cannot cover, or None when every product is covered.
        """
        lines = tuple(lines)
        demands = [product_demand(line.item, line.quantity) for line in lines]
        total: dict[int, Decimal] = defaultdict(Decimal)
        for demand in demands:
            for product_id, pounds in demand.items():
                total[product_id] += pounds

        def pick(short: set[int]) -> LineItem | None:
            for line, demand in zip(lines, demands, strict=True):
                if short.intersection(demand):
                    logger.info("Insufficient stock for %s x %s", line.item.name, line.quantity)
                    return line
            return None

        return self._short_products(total).map(pick)


__all__ = ("product_demand", "StockValidator")
