"""
Session — a cashier's sale workflow over one cart.
"""

from __future__ import annotations

from lonja.session._session import SessionErrorKind, SessionError, SaleSession

__all__ = ("SessionErrorKind", "SessionError", "SaleSession")
