"""
Core types for lonja.

Re-exports from kungfu + money/weight aliases.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Lazy Computation Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Lazy[T, E] = LazyCoroResult[T, E]
"""Lazy async computation that may fail."""

# ═══════════════════════════════════════════════════════════════════════════════
# Quantities
# ═══════════════════════════════════════════════════════════════════════════════

type Money = Decimal
"""Amount in the store currency, two decimals after rounding."""

type Pounds = Decimal
"""Weight in pounds. Combos are sold in units and reuse this type."""

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Money:
    """Round half-up to cents, the way receipts are printed."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """
    Coerce a wire/user number into Decimal.

    Floats go through str() so 0.1 stays 0.1 and not its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Aliases
    "Lazy",
    "Money",
    "Pounds",
    # Helpers
    "CENT",
    "round_money",
    "to_decimal",
)
