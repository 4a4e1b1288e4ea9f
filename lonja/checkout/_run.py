"""
Checkout — validate, submit, reconcile.

    checkout = Checkout(store, StockValidator(store), snapshot)
    match await checkout.run(cart):
        case Ok(sale):
            print(sale.total)          # server total, not cart.total
        case Error(e) if e.is_validation:
            ...
        case Error(e):
            ...

Hard stops, in order: a checkout already running for this cart, no
customer, empty cart, a line the store cannot cover. Only then is the
sale sent. On success the cart is reset and the catalog refreshed once;
on any failure the cart is left as it was.
"""

from __future__ import annotations

import logging

from kungfu import Ok, Error, Result

from lonja.domain import SaleRequest, SaleRequestLine, SaleRecord
from lonja.cart import Cart, LineItem
from lonja.catalog import CatalogSnapshot
from lonja.remote import RemoteStore
from lonja.stock import StockValidator
from lonja.checkout._types import CheckoutError, CheckoutErrors

logger = logging.getLogger(__name__)


def build_sale_request(cart: Cart) -> SaleRequest:
    """Sale payload for the cart. Prices are left to the server."""
    return SaleRequest(
        customer=cart.customer.strip(),
        notes=cart.notes.strip(),
        lines=tuple(
            SaleRequestLine(kind=line.kind, item_id=line.item.id, quantity=line.quantity)
            for line in cart.lines
        ),
    )


class Checkout:
    __slots__ = ("_store", "_validator", "_catalog")

    def __init__(
        self,
        store: RemoteStore,
        validator: StockValidator,
        catalog: CatalogSnapshot,
    ) -> None:
        self._store = store
        self._validator = validator
        self._catalog = catalog

    async def run(self, cart: Cart) -> Result[SaleRecord, CheckoutError]:
        if cart.locked:
            return Error(CheckoutErrors.in_flight())
        if not cart.customer.strip():
            return Error(CheckoutErrors.missing_customer())
        if cart.is_empty:
            return Error(CheckoutErrors.empty_cart())

        cart.lock()
        # Read once; later edits to customer or notes do not reach this sale
        lines = cart.lines
        request = build_sale_request(cart)
        try:
            result = await self._submit(lines, request)
        finally:
            cart.unlock()

        match result:
            case Ok(sale):
                logger.info(
                    "Sale %s accepted for %r: total %s (cart showed %s)",
                    sale.id, sale.customer, sale.total, cart.total,
                )
                cart.reset()
                await self._refresh_catalog()
            case Error(e):
                logger.warning("Checkout failed [%s]: %s", e.kind.name, e.message)
        return result

    async def _submit(
        self,
        lines: tuple[LineItem, ...],
        request: SaleRequest,
    ) -> Result[SaleRecord, CheckoutError]:
        match await self._validator.first_short(lines):
            case Ok(None):
                pass
            case Ok(line):
                return Error(CheckoutErrors.insufficient_stock(line))
            case Error(e):
                return Error(CheckoutErrors.from_remote(e))

        return await self._store.create_sale(request).map_err(CheckoutErrors.from_remote)

    async def _refresh_catalog(self) -> None:
        match await self._catalog.refresh():
            case Ok(_):
                pass
            case Error(e):
                # The sale stands; the snapshot is stale until the next refresh
                logger.warning("Catalog refresh after sale failed: %s", e)


__all__ = ("build_sale_request", "Checkout")
