"""
Dashboard — today's totals next to the low-stock list.

    DashboardRequest ─┬─> DailyTotalsNode ────┬─> DashboardNode
                      └─> ActiveProductsNode ─┘

The two fetches share no inputs, so the graph runs them concurrently.
Nodes raise RemoteError; load_dashboard turns it back into a Result.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from kungfu import Ok, Error, Result

from lonja import graph as G
from lonja.catalog import is_low_stock
from lonja.domain import Product, DailyTotals, DashboardSummary
from lonja.remote import RemoteStore, RemoteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DashboardRequest:
    store: RemoteStore
    day: date
    threshold: Decimal


@G.node
class RequestNode:
    """Entry point: wraps the request."""

    def __init__(self, data: DashboardRequest) -> None:
        self.data = data

    @classmethod
    def __compose__(cls, request: DashboardRequest) -> "RequestNode":
        return cls(request)


@G.node
class DailyTotalsNode:
    def __init__(self, data: DailyTotals) -> None:
        self.data = data

    @classmethod
    async def __compose__(cls, request: RequestNode) -> "DailyTotalsNode":
        match await request.data.store.daily_totals(request.data.day):
            case Ok(totals):
                return cls(totals)
            case Error(e):
                raise e


@G.node
class ActiveProductsNode:
    def __init__(self, data: list[Product]) -> None:
        self.data = data

    @classmethod
    async def __compose__(cls, request: RequestNode) -> "ActiveProductsNode":
        match await request.data.store.list_active_products():
            case Ok(products):
                return cls(products)
            case Error(e):
                raise e


@G.node
class DashboardNode:
    def __init__(self, data: DashboardSummary) -> None:
        self.data = data

    @classmethod
    def __compose__(
        cls,
        request: RequestNode,
        totals: DailyTotalsNode,
        products: ActiveProductsNode,
    ) -> "DashboardNode":
        low = tuple(
            sorted(
                (p for p in products.data if is_low_stock(p, request.data.threshold)),
                key=lambda p: (p.stock_lb, p.name),
            )
        )
        return cls(DashboardSummary(
            day=request.data.day,
            totals=totals.data,
            low_stock=low,
            active_products=len(products.data),
        ))


async def load_dashboard(
    store: RemoteStore,
    day: date,
    threshold: Decimal = Decimal("5"),
) -> Result[DashboardSummary, RemoteError]:
    try:
        node = await G.compose(DashboardNode, DashboardRequest(store, day, threshold))
    except RemoteError as e:
        logger.warning("Dashboard for %s failed: %s", day, e)
        return Error(e)
    return Ok(node.data)


__all__ = (
    "DashboardRequest",
    "RequestNode",
    "DailyTotalsNode",
    "ActiveProductsNode",
    "DashboardNode",
    "load_dashboard",
)
