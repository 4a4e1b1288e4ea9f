"""
Cart types — line items and cart errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto

from lonja._types import Money
from lonja.domain import Item, ItemKind, kind_of, unit_price_of


@dataclass(frozen=True, slots=True)
class LineItem:
    """
    One row of the cart.

    ``item`` is the catalog record as it was when added; it is what the
    line is priced and displayed with.
    """

    item: Item
    quantity: Decimal

    @property
    def kind(self) -> ItemKind:
        return kind_of(self.item)

    @property
    def key(self) -> tuple[ItemKind, int]:
        return (self.kind, self.item.id)

    @property
    def unit_price(self) -> Money:
        return unit_price_of(self.item)

    @property
    def subtotal(self) -> Decimal:
        """Unrounded; only the cart total is rounded."""
        return self.quantity * self.unit_price


class CartErrorKind(Enum):
    INVALID_QUANTITY = auto()  # Zero, negative, NaN or infinite
    OUT_OF_RANGE = auto()  # remove() with a bad index
    LOCKED = auto()  # Checkout in flight


@dataclass(frozen=True, slots=True)
class CartError:
    kind: CartErrorKind
    message: str


__all__ = ("LineItem", "CartErrorKind", "CartError")
