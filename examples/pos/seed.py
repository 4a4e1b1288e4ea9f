"""
Seed — a small fish counter for the demo store.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from lonja.domain import Product, Combo, ComboComponent, SaleRecord
from lonja.remote import MemoryStore


PRODUCTS = (
    Product(1, "Camarón mediano", Decimal("8.50"), Decimal("25"), packaging="Bolsa"),
    Product(2, "Tilapia entera", Decimal("3.25"), Decimal("40"), packaging="Hielo"),
    Product(3, "Pulpo", Decimal("12.00"), Decimal("4.5"), packaging="Bandeja"),
    Product(4, "Corvina filete", Decimal("9.75"), Decimal("18"), packaging="Bandeja"),
    Product(5, "Calamar", Decimal("6.40"), Decimal("3"), packaging="Bolsa"),
)

COMBOS = (
    Combo(
        10, "Combo Sopa Marinera", Decimal("17.00"),
        (ComboComponent(1, Decimal("1")), ComboComponent(2, Decimal("2")), ComboComponent(5, Decimal("0.5"))),
        description="Camarón, tilapia y calamar para sopa",
    ),
    Combo(
        11, "Combo Ceviche", Decimal("28.00"),
        (ComboComponent(3, Decimal("1")), ComboComponent(4, Decimal("1.5"))),
        description="Pulpo y corvina",
    ),
)


def seeded_store() -> MemoryStore:
    store = MemoryStore(PRODUCTS, COMBOS)
    now = datetime.now()
    history = [
        (now - timedelta(days=40), "Restaurante El Faro", Decimal("185.40")),
        (now - timedelta(days=35), "Doña Carmen", Decimal("22.75")),
        (now - timedelta(days=3), "Marisquería Puerto", Decimal("310.00")),
        (now - timedelta(days=1), "Luis Ortega", Decimal("42.50")),
        (now, "Ana Ruiz", Decimal("17.00")),
    ]
    for sale_id, (sold_at, customer, total) in enumerate(history, start=9001):
        store.add_sale(SaleRecord(id=sale_id, customer=customer, total=total, sold_at=sold_at.isoformat()))
    return store


__all__ = ("PRODUCTS", "COMBOS", "seeded_store")
