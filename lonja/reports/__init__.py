"""
Reports — sales by day or month, plus the daily dashboard.

    from lonja import reports as Rp

    report = Rp.build_report(sales, Rp.Granularity.MONTH)
    for bucket in report.buckets:
        print(bucket.key, bucket.total, bucket.count, bucket.average)
"""

from __future__ import annotations

from lonja.reports._types import Granularity, Bucket, SalesReport
from lonja.reports._aggregate import bucket_key, aggregate, build_report
from lonja.reports._service import ReportService
from lonja.reports._dashboard import load_dashboard

__all__ = (
    "Granularity",
    "Bucket",
    "SalesReport",
    "bucket_key",
    "aggregate",
    "build_report",
    "ReportService",
    "load_dashboard",
)
