"""
Tests for stock validation against the store.
"""

import asyncio
from dataclasses import replace
from decimal import Decimal

from kungfu import Ok, Error, LazyCoroResult

from lonja.cart import LineItem
from lonja.domain import ItemKind, Combo, ComboComponent
from lonja.remote import RemoteError, RemoteErrorKind
from lonja.stock import StockValidator, product_demand


class TestProducts:
    async def test_enough_stock(self, validator, shrimp):
        assert await validator.has_stock(shrimp, Decimal("5")) == Ok(True)

    async def test_exactly_available_is_enough(self, validator, shrimp):
        """Available == requested passes; the check is >=, not > 0."""
        assert await validator.has_stock(shrimp, Decimal("20")) == Ok(True)

    async def test_more_than_available(self, validator, shrimp):
        assert await validator.has_stock(shrimp, Decimal("20.01")) == Ok(False)

    async def test_always_asks_the_store(self, store, validator, shrimp):
        await validator.has_stock(shrimp, Decimal("1"))
        await validator.has_stock(shrimp, Decimal("1"))

        assert store.calls["has_stock"] == 2

    async def test_remote_failure_is_returned(self, store, validator, shrimp):
        store.fail_next(RemoteError(RemoteErrorKind.TIMEOUT, "slow"), "has_stock")

        result = await validator.has_stock(shrimp, Decimal("1"))

        match result:
            case Error(e):
                assert e.kind is RemoteErrorKind.TIMEOUT
            case Ok(_):
                raise AssertionError("expected a timeout")


class TestCombos:
    async def test_combo_checks_every_component(self, store, validator, soup_combo):
        assert await validator.has_stock(soup_combo, Decimal("3")) == Ok(True)
        assert store.calls["has_stock"] == len(soup_combo.components)

    async def test_combo_scales_component_quantities(self, validator, ceviche_combo):
        """2 lb octopus per unit, 4 lb in stock: two units fit, three do not."""
        assert await validator.has_stock(ceviche_combo, Decimal("2")) == Ok(True)
        assert await validator.has_stock(ceviche_combo, Decimal("3")) == Ok(False)

    async def test_components_are_checked_concurrently(self, shrimp, tilapia, soup_combo):
        in_flight = 0
        peak = 0

        class SlowStore:
            def has_stock(self, kind, item_id, quantity):
                async def run():
                    nonlocal in_flight, peak
                    in_flight += 1
                    peak = max(peak, in_flight)
                    await asyncio.sleep(0.01)
                    in_flight -= 1
                    return Ok(True)
                return LazyCoroResult(run)

        validator = StockValidator(SlowStore())

        assert await validator.has_stock(soup_combo, Decimal("1")) == Ok(True)
        assert peak == 2

    async def test_repeated_component_is_checked_against_summed_pounds(self, store, validator, shrimp):
        combo = Combo(
            id=12,
            name="Doble camarón",
            price=Decimal("15.00"),
            components=(ComboComponent(shrimp.id, Decimal("1")), ComboComponent(shrimp.id, Decimal("1"))),
        )
        store.combos[combo.id] = combo
        store.products[shrimp.id] = replace(shrimp, stock_lb=Decimal("1.5"))

        assert await validator.has_stock(combo, Decimal("1")) == Ok(False)
        assert store.calls["has_stock"] == 1
        assert await store.has_stock(ItemKind.COMBO, combo.id, Decimal("1")) == Ok(False)


class TestDemand:
    def test_product_draws_on_itself(self, shrimp):
        assert product_demand(shrimp, Decimal("2.5")) == {shrimp.id: Decimal("2.5")}

    def test_combo_scales_and_merges_components(self, soup_combo):
        assert product_demand(soup_combo, Decimal("3")) == {1: Decimal("3"), 2: Decimal("6")}


class TestFirstShort:
    async def test_all_lines_covered(self, validator, shrimp, soup_combo):
        lines = [LineItem(shrimp, Decimal("2")), LineItem(soup_combo, Decimal("1"))]

        assert await validator.first_short(lines) == Ok(None)

    async def test_reports_first_failing_line_in_cart_order(self, validator, shrimp, octopus, ceviche_combo):
        lines = [
            LineItem(shrimp, Decimal("1")),
            LineItem(octopus, Decimal("10")),
            LineItem(ceviche_combo, Decimal("5")),
        ]

        result = await validator.first_short(lines)

        assert isinstance(result, Ok)
        assert result.value is lines[1]

    async def test_checks_every_line(self, store, validator, shrimp, tilapia):
        lines = [LineItem(shrimp, Decimal("999")), LineItem(tilapia, Decimal("1"))]

        await validator.first_short(lines)

        assert store.calls["has_stock"] == 2

    async def test_demand_is_summed_across_lines(self, store, validator, shrimp, soup_combo):
        """20 lb of shrimp on its own line plus 1 lb inside the combo: 21 of 20."""
        lines = [LineItem(shrimp, Decimal("20")), LineItem(soup_combo, Decimal("1"))]

        result = await validator.first_short(lines)

        assert isinstance(result, Ok)
        assert result.value is lines[0]
        assert store.calls["has_stock"] == 2

    async def test_unknown_product_is_rejected(self, store, validator, shrimp):
        store.products.pop(shrimp.id)

        result = await validator.first_short([LineItem(shrimp, Decimal("1"))])

        match result:
            case Error(e):
                assert e.kind is RemoteErrorKind.REJECTED
                assert e.status == 404
            case Ok(_):
                raise AssertionError("expected rejection")


async def test_memory_store_has_stock_for_combo_directly(store, soup_combo):
    assert await store.has_stock(ItemKind.COMBO, soup_combo.id, Decimal("12")) == Ok(False)
    assert await store.has_stock(ItemKind.COMBO, soup_combo.id, Decimal("6")) == Ok(True)
