"""
CatalogSnapshot — last fetched view of active products and combos.

Valid until the next fetch; nothing expires on its own. A failed or
cancelled fetch leaves the previous snapshot in place.
"""

from __future__ import annotations

import logging

import combinators as C
from kungfu import LazyCoroResult

from lonja.domain import ItemKind, Product, Combo, Item
from lonja.remote import RemoteStore, RemoteError

logger = logging.getLogger(__name__)


class CatalogSnapshot:
    __slots__ = ("_store", "_products", "_combos", "_fetch_count")

    def __init__(self, store: RemoteStore) -> None:
        self._store = store
        self._products: tuple[Product, ...] = ()
        self._combos: tuple[Combo, ...] = ()
        self._fetch_count = 0

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def combos(self) -> tuple[Combo, ...]:
        return self._combos

    @property
    def fetch_count(self) -> int:
        """Completed refreshes. Single-list fetches are not counted."""
        return self._fetch_count

    def _store_products(self, products: list[Product]) -> tuple[Product, ...]:
        self._products = tuple(products)
        logger.debug("Catalog snapshot: %d active products", len(products))
        return self._products

    def _store_combos(self, combos: list[Combo]) -> tuple[Combo, ...]:
        self._combos = tuple(combos)
        logger.debug("Catalog snapshot: %d active combos", len(combos))
        return self._combos

    def list_active_products(self) -> LazyCoroResult[tuple[Product, ...], RemoteError]:
        return self._store.list_active_products().map(self._store_products)

    def list_active_combos(self) -> LazyCoroResult[tuple[Combo, ...], RemoteError]:
        return self._store.list_active_combos().map(self._store_combos)

    def refresh(self) -> LazyCoroResult[CatalogSnapshot, RemoteError]:
        """
        Fetch products and combos concurrently.

        Both lists are applied together: if either fetch fails,
        neither half of the snapshot changes.
        """
        def apply(lists: list[list[Product] | list[Combo]]) -> CatalogSnapshot:
            products, combos = lists
            self._store_products(products)  # type: ignore[arg-type]
            self._store_combos(combos)  # type: ignore[arg-type]
            self._fetch_count += 1
            return self

        return C.parallel(
            self._store.list_active_products(),
            self._store.list_active_combos(),
        ).map(apply)

    def find(self, kind: ItemKind, item_id: int) -> Item | None:
        match kind:
            case ItemKind.PRODUCT:
                return next((p for p in self._products if p.id == item_id), None)
            case ItemKind.COMBO:
                return next((c for c in self._combos if c.id == item_id), None)


__all__ = ("CatalogSnapshot",)
