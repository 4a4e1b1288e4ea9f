"""
ReportService — fetch a date range and aggregate it.
"""

from __future__ import annotations

import logging
from datetime import date

from kungfu import Ok, Error, Result

from lonja.remote import RemoteStore, RemoteError
from lonja.reports._types import Granularity, SalesReport
from lonja.reports._aggregate import build_report

logger = logging.getLogger(__name__)


class ReportService:
    """
    Keeps the last good report.

    A failed fetch returns the error and leaves ``last_report`` as it was,
    so a screen can keep showing the previous numbers.
    """

    __slots__ = ("_store", "_last")

    def __init__(self, store: RemoteStore) -> None:
        self._store = store
        self._last: SalesReport | None = None

    @property
    def last_report(self) -> SalesReport | None:
        return self._last

    async def sales_report(
        self,
        start: date,
        end: date,
        granularity: Granularity = Granularity.DAY,
    ) -> Result[SalesReport, RemoteError]:
        if end < start:
            start, end = end, start

        match await self._store.list_sales(start, end):
            case Ok(sales):
                report = build_report(sales, granularity)
                self._last = report
                logger.debug(
                    "Report %s..%s by %s: %d bucket(s)",
                    start, end, granularity.value, len(report.buckets),
                )
                return Ok(report)
            case Error(e):
                logger.warning("Sales report %s..%s failed: %s", start, end, e)
                return Error(e)


__all__ = ("ReportService",)
