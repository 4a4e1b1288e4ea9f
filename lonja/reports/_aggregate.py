"""
Aggregate — fold sale records into time buckets.

Count is the number of sales in a bucket, not the quantity of goods.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime
from decimal import Decimal

from lonja.domain import SaleRecord
from lonja.reports._types import Granularity, Bucket, SalesReport

logger = logging.getLogger(__name__)


def _parse(raw: str) -> datetime | date | None:
    text = raw.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def bucket_key(raw: str | None, granularity: Granularity) -> str | None:
    """
    ``YYYY-MM-DD`` or ``YYYY-MM`` for an ISO timestamp, None if unreadable.

    Aware timestamps are bucketed by their UTC date; naive ones as given.
    """
    if raw is None:
        return None
    parsed = _parse(raw)
    if parsed is None:
        return None

    if isinstance(parsed, datetime):
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(UTC)
        day = parsed.date()
    else:
        day = parsed

    match granularity:
        case Granularity.DAY:
            return day.isoformat()
        case Granularity.MONTH:
            return f"{day.year:04d}-{day.month:02d}"


def _fold(sales: Iterable[SaleRecord], granularity: Granularity) -> tuple[dict[str, Bucket], int]:
    totals: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    skipped = 0

    for sale in sales:
        key = bucket_key(sale.sold_at, granularity)
        if key is None:
            skipped += 1
            logger.debug("Skipping sale %s: unreadable date %r", sale.id, sale.sold_at)
            continue
        totals[key] = totals.get(key, Decimal(0)) + sale.total
        counts[key] = counts.get(key, 0) + 1

    buckets = {
        key: Bucket(key=key, total=totals[key], count=counts[key])
        for key in sorted(totals, reverse=True)
    }
    return buckets, skipped


def aggregate(sales: Iterable[SaleRecord], granularity: Granularity) -> dict[str, Bucket]:
    """Buckets keyed by date string, iterated most recent first."""
    buckets, _ = _fold(sales, granularity)
    return buckets


def build_report(sales: Iterable[SaleRecord], granularity: Granularity) -> SalesReport:
    buckets, skipped = _fold(sales, granularity)
    if skipped:
        logger.warning("%d sale(s) left out of the report: missing or unreadable date", skipped)
    return SalesReport(granularity=granularity, buckets=tuple(buckets.values()), skipped=skipped)


__all__ = ("bucket_key", "aggregate", "build_report")
