"""
SaleSession — one cashier workflow: catalog, cart, stock checks, checkout.

    session = SaleSession(store)
    await session.open()
    await session.add(ItemKind.PRODUCT, 3, Decimal("2.5"))
    session.cart.customer = "Rosa"
    result = await session.checkout()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum, auto

from kungfu import Ok, Error, Result

from lonja._types import Money, to_decimal
from lonja.config import Settings, get_settings
from lonja.domain import ItemKind, Product, Combo, SaleRecord
from lonja.cart import Cart, CartError, LineItem
from lonja.catalog import CatalogSnapshot, combo_savings, is_low_stock
from lonja.checkout import Checkout, CheckoutError
from lonja.remote import RemoteStore, RemoteError
from lonja.stock import StockValidator

logger = logging.getLogger(__name__)


class SessionErrorKind(Enum):
    NOT_IN_CATALOG = auto()
    INSUFFICIENT_STOCK = auto()
    CART = auto()
    REMOTE = auto()


@dataclass(frozen=True, slots=True)
class SessionError:
    kind: SessionErrorKind
    message: str
    cart_error: CartError | None = None
    remote_error: RemoteError | None = None


class SaleSession:
    __slots__ = ("store", "settings", "catalog", "validator", "cart", "_checkout")

    def __init__(self, store: RemoteStore, settings: Settings | None = None) -> None:
        self.store = store
        self.settings = settings or get_settings()
        self.catalog = CatalogSnapshot(store)
        self.validator = StockValidator(store)
        self.cart = Cart()
        self._checkout = Checkout(store, self.validator, self.catalog)

    async def open(self) -> Result[CatalogSnapshot, RemoteError]:
        return await self.catalog.refresh()

    async def add(
        self,
        kind: ItemKind,
        item_id: int,
        quantity: Decimal | int | str = Decimal(1),
    ) -> Result[Cart, SessionError]:
        """
        Add an item from the current snapshot after a fresh stock check.

        The check covers what the line would hold after the add, not just
        the added quantity.
        """
        item = self.catalog.find(kind, item_id)
        if item is None:
            return Error(SessionError(
                SessionErrorKind.NOT_IN_CATALOG,
                f"{kind.value} {item_id} is not in the active catalog",
            ))

        # Let the cart reject bad quantities before going to the store
        try:
            qty = to_decimal(quantity)
        except InvalidOperation:
            qty = Decimal(0)
        if self.cart.locked or not qty.is_finite() or qty <= 0:
            return self._cart_result(self.cart.add(item, quantity))

        wanted = self.cart.quantity_of(item) + qty
        match await self.validator.has_stock(item, wanted):
            case Ok(True):
                logger.debug("Adding %s x %s to cart %s", item.name, qty, self.cart.id)
                return self._cart_result(self.cart.add(item, qty))
            case Ok(False):
                return Error(SessionError(
                    SessionErrorKind.INSUFFICIENT_STOCK,
                    f"not enough stock for {item.name} ({wanted})",
                ))
            case Error(e):
                return Error(SessionError(SessionErrorKind.REMOTE, str(e), remote_error=e))

    def _cart_result(self, result: Result[Cart, CartError]) -> Result[Cart, SessionError]:
        match result:
            case Ok(cart):
                return Ok(cart)
            case Error(e):
                return Error(SessionError(SessionErrorKind.CART, e.message, cart_error=e))

    def remove(self, index: int) -> Result[LineItem, CartError]:
        return self.cart.remove(index)

    def cancel(self) -> bool:
        """Drop the sale in progress. False while a checkout is running."""
        if self.cart.locked:
            return False
        self.cart.reset()
        return True

    async def checkout(self) -> Result[SaleRecord, CheckoutError]:
        return await self._checkout.run(self.cart)

    def combo_savings(self, combo_id: int) -> Money | None:
        combo = self.catalog.find(ItemKind.COMBO, combo_id)
        if not isinstance(combo, Combo):
            return None
        return combo_savings(combo, self.catalog.products)

    def low_stock(self) -> tuple[Product, ...]:
        """Snapshot products at or under the configured threshold."""
        threshold = self.settings.low_stock_threshold_lb
        return tuple(p for p in self.catalog.products if is_low_stock(p, threshold))


__all__ = ("SessionErrorKind", "SessionError", "SaleSession")
