"""
Cart — line items of the sale in progress, merged by (kind, id).
"""

from __future__ import annotations

from lonja.cart._types import LineItem, CartError, CartErrorKind
from lonja.cart._cart import Cart

__all__ = (
    "Cart",
    "LineItem",
    "CartError",
    "CartErrorKind",
)
