"""
Stock — fresh availability checks against the store.
"""

from __future__ import annotations

from lonja.stock._validator import product_demand, StockValidator

__all__ = ("product_demand", "StockValidator")
