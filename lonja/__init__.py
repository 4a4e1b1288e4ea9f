"""
lonja — point of sale for a fresh seafood market.

    from lonja import cart as Ct       # Line items, advisory total
    from lonja import checkout as Co   # Stock-checked sale submission
    from lonja import reports as Rp    # Sales by day/month, dashboard
    from lonja import session as Ss    # One cashier workflow
"""

from lonja import remote
from lonja import catalog
from lonja import stock
from lonja import cart
from lonja import checkout
from lonja import reports
from lonja import session
from lonja import graph
from lonja._types import (
    Lazy,
    Money,
    Pounds,
    round_money,
)

__version__ = "0.1.0"

__all__ = (
    "remote",
    "catalog",
    "stock",
    "cart",
    "checkout",
    "reports",
    "session",
    "graph",
    "Lazy",
    "Money",
    "Pounds",
    "round_money",
)
