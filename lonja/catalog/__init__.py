"""
Catalog — active products and combos, as last fetched.

    from lonja import catalog as K

    snapshot = K.CatalogSnapshot(store)
    await snapshot.refresh()
    savings = K.combo_savings(combo, snapshot.products)
"""

from __future__ import annotations

from lonja.catalog._snapshot import CatalogSnapshot
from lonja.catalog._pricing import combo_component_total, combo_savings, is_low_stock

__all__ = (
    "CatalogSnapshot",
    "combo_component_total",
    "combo_savings",
    "is_low_stock",
)
