"""
Checkout — turn a cart into a recorded sale.
"""

from __future__ import annotations

from lonja.checkout._types import CheckoutErrorKind, CheckoutError, CheckoutErrors
from lonja.checkout._run import build_sale_request, Checkout

__all__ = (
    "CheckoutErrorKind",
    "CheckoutError",
    "CheckoutErrors",
    "build_sale_request",
    "Checkout",
)
