"""
Checkout types — why a checkout did not produce a sale.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from lonja.cart import LineItem
from lonja.remote import RemoteError, RemoteErrorKind


class CheckoutErrorKind(Enum):
    # Local validation, no sale was sent
    MISSING_CUSTOMER = auto()
    EMPTY_CART = auto()
    IN_FLIGHT = auto()
    INSUFFICIENT_STOCK = auto()
    # Remote outcome
    REJECTED = auto()  # Server refused the sale (e.g. stock sold meanwhile)
    UNREACHABLE = auto()  # Timeout or connection failure
    SERVER = auto()
    MALFORMED = auto()


_VALIDATION = frozenset({
    CheckoutErrorKind.MISSING_CUSTOMER,
    CheckoutErrorKind.EMPTY_CART,
    CheckoutErrorKind.IN_FLIGHT,
    CheckoutErrorKind.INSUFFICIENT_STOCK,
})


@dataclass(frozen=True, slots=True)
class CheckoutError:
    """
    Checkout failure.

    ``line`` is set for INSUFFICIENT_STOCK; ``cause`` carries the remote
    error for remote kinds.
    """

    kind: CheckoutErrorKind
    message: str
    line: LineItem | None = None
    cause: RemoteError | None = None

    @property
    def is_validation(self) -> bool:
        return self.kind in _VALIDATION

    @property
    def is_retryable(self) -> bool:
        """The same cart may succeed if submitted again later."""
        return self.kind in (
            CheckoutErrorKind.REJECTED,
            CheckoutErrorKind.UNREACHABLE,
            CheckoutErrorKind.SERVER,
        )

    @property
    def user_message(self) -> str:
        match self.kind:
            case CheckoutErrorKind.UNREACHABLE:
                return "Cannot reach the server. Check the connection and try again."
            case CheckoutErrorKind.INSUFFICIENT_STOCK if self.line is not None:
                return f"Not enough stock for {self.line.item.name}"
            case _:
                return self.message


class CheckoutErrors:
    @staticmethod
    def missing_customer() -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.MISSING_CUSTOMER, "customer name is required")

    @staticmethod
    def empty_cart() -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.EMPTY_CART, "cart has no items")

    @staticmethod
    def in_flight() -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.IN_FLIGHT, "a checkout for this cart is already running")

    @staticmethod
    def insufficient_stock(line: LineItem) -> CheckoutError:
        return CheckoutError(
            CheckoutErrorKind.INSUFFICIENT_STOCK,
            f"not enough stock for {line.item.name} ({line.quantity})",
            line=line,
        )

    @staticmethod
    def from_remote(error: RemoteError) -> CheckoutError:
        match error.kind:
            case RemoteErrorKind.TRANSPORT | RemoteErrorKind.TIMEOUT:
                kind = CheckoutErrorKind.UNREACHABLE
            case RemoteErrorKind.REJECTED:
                kind = CheckoutErrorKind.REJECTED
            case RemoteErrorKind.SERVER:
                kind = CheckoutErrorKind.SERVER
            case RemoteErrorKind.MALFORMED:
                kind = CheckoutErrorKind.MALFORMED
        return CheckoutError(kind, error.message, cause=error)


__all__ = ("CheckoutErrorKind", "CheckoutError", "CheckoutErrors")
