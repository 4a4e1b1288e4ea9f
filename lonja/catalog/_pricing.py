"""
Pricing helpers over catalog data.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from lonja._types import Money, Pounds, round_money
from lonja.domain import Combo, Product


def combo_component_total(combo: Combo, products: Iterable[Product]) -> Money:
    """
    What the combo's components would cost bought separately.

    Components whose product is not in ``products`` count as zero.
    """
    by_id = {p.id: p for p in products}
    total = Decimal(0)
    for component in combo.components:
        product = by_id.get(component.product_id)
        if product is not None:
            total += product.price_per_lb * component.quantity_lb
    return round_money(total)


def combo_savings(combo: Combo, products: Iterable[Product]) -> Money:
    """Component total minus combo price. May be negative."""
    return combo_component_total(combo, products) - round_money(combo.price)


def is_low_stock(product: Product, threshold: Pounds = Decimal("5")) -> bool:
    return product.stock_lb <= threshold


__all__ = ("combo_component_total", "combo_savings", "is_low_stock")
