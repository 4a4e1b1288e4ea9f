"""
Cart — the sale being composed.

    cart = Cart(customer="Rosa")
    match cart.add(shrimp, Decimal("2.5")):
        case Ok(cart): ...
        case Error(e): print(e.message)

Stock is not checked here; callers validate before adding.
"""

from __future__ import annotations

import uuid
from decimal import Decimal, InvalidOperation

from kungfu import Ok, Error, Result

from lonja._types import Money, round_money, to_decimal
from lonja.domain import Item, kind_of
from lonja.cart._types import LineItem, CartError, CartErrorKind


class Cart:
    __slots__ = ("id", "customer", "notes", "_lines", "_locked")

    def __init__(self, customer: str = "", notes: str = "") -> None:
        self.id = uuid.uuid4().hex
        self.customer = customer
        self.notes = notes
        self._lines: list[LineItem] = []
        self._locked = False

    def __repr__(self) -> str:
        return f"Cart(customer={self.customer!r}, lines={len(self._lines)}, total={self.total})"

    # ───────────────────────────────────────────────────────────────────────
    # Views
    # ───────────────────────────────────────────────────────────────────────

    @property
    def lines(self) -> tuple[LineItem, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total(self) -> Money:
        """Advisory total. The server's sale total is authoritative."""
        return round_money(sum((line.subtotal for line in self._lines), Decimal(0)))

    @property
    def locked(self) -> bool:
        return self._locked

    def quantity_of(self, item: Item) -> Decimal:
        key = (kind_of(item), item.id)
        return next((line.quantity for line in self._lines if line.key == key), Decimal(0))

    # ───────────────────────────────────────────────────────────────────────
    # Mutations
    # ───────────────────────────────────────────────────────────────────────

    def _locked_error(self) -> CartError:
        return CartError(CartErrorKind.LOCKED, "checkout in progress, cart cannot change")

    def add(self, item: Item, quantity: Decimal | int | str = Decimal(1)) -> Result[Cart, CartError]:
        """
        Add ``quantity`` of ``item``.

        Adding an item already in the cart (same kind and id) grows that
        line instead of appending a new one. The line takes the newer
        copy of the item, so it is priced at what was last fetched.
        """
        if self._locked:
            return Error(self._locked_error())

        try:
            qty = to_decimal(quantity)
        except InvalidOperation:
            qty = Decimal("NaN")
        if not qty.is_finite() or qty <= 0:
            return Error(CartError(CartErrorKind.INVALID_QUANTITY, f"quantity must be positive, got {quantity}"))

        key = (kind_of(item), item.id)
        for index, line in enumerate(self._lines):
            if line.key == key:
                self._lines[index] = LineItem(item, line.quantity + qty)
                return Ok(self)

        self._lines.append(LineItem(item, qty))
        return Ok(self)

    def remove(self, index: int) -> Result[LineItem, CartError]:
        if self._locked:
            return Error(self._locked_error())
        if not 0 <= index < len(self._lines):
            return Error(CartError(
                CartErrorKind.OUT_OF_RANGE,
                f"no line at index {index} (cart has {len(self._lines)})",
            ))
        return Ok(self._lines.pop(index))

    def reset(self) -> None:
        """Empty the cart and clear customer and notes."""
        self._lines.clear()
        self.customer = ""
        self.notes = ""

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        self._locked = False


__all__ = ("Cart",)
