"""
Report types.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from lonja._types import Money, round_money


class Granularity(Enum):
    DAY = "day"
    MONTH = "month"


@dataclass(frozen=True, slots=True)
class Bucket:
    key: str
    total: Money
    count: int

    @property
    def average(self) -> Money:
        # Buckets are only created from at least one sale
        return round_money(self.total / self.count)


@dataclass(frozen=True, slots=True)
class SalesReport:
    """
    Buckets, most recent first.

    ``skipped`` counts sales left out for a missing or unreadable date.
    """

    granularity: Granularity
    buckets: tuple[Bucket, ...]
    skipped: int = 0

    @property
    def total(self) -> Money:
        return round_money(sum((b.total for b in self.buckets), Decimal(0)))

    @property
    def count(self) -> int:
        return sum(b.count for b in self.buckets)


__all__ = ("Granularity", "Bucket", "SalesReport")
