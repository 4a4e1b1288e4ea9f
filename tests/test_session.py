"""
Tests for the sale session workflow.
"""

from decimal import Decimal

import pytest
from kungfu import Ok, Error

from lonja.cart import CartErrorKind
from lonja.domain import ItemKind
from lonja.remote import RemoteError, RemoteErrorKind
from lonja.session import SaleSession, SessionErrorKind


@pytest.fixture
async def session(store, settings):
    s = SaleSession(store, settings)
    assert isinstance(await s.open(), Ok)
    return s


class TestAdd:
    async def test_add_product_after_stock_check(self, store, session, shrimp):
        result = await session.add(ItemKind.PRODUCT, shrimp.id, Decimal("2"))

        assert isinstance(result, Ok)
        assert session.cart.lines[0].item == shrimp
        assert store.calls["has_stock"] == 1

    async def test_unknown_item(self, session):
        match await session.add(ItemKind.COMBO, 999):
            case Error(e):
                assert e.kind is SessionErrorKind.NOT_IN_CATALOG
            case Ok(_):
                pytest.fail("added an item outside the catalog")

    async def test_stock_check_covers_merged_quantity(self, session, octopus):
        """3 lb then 2 lb of octopus: the second add would need 5 lb of 4."""
        assert isinstance(await session.add(ItemKind.PRODUCT, octopus.id, 3), Ok)

        match await session.add(ItemKind.PRODUCT, octopus.id, 2):
            case Error(e):
                assert e.kind is SessionErrorKind.INSUFFICIENT_STOCK
            case Ok(_):
                pytest.fail("merged line exceeds stock")
        assert session.cart.lines[0].quantity == Decimal("3")

    async def test_invalid_quantity_skips_the_store(self, store, session, shrimp):
        match await session.add(ItemKind.PRODUCT, shrimp.id, 0):
            case Error(e):
                assert e.kind is SessionErrorKind.CART
                assert e.cart_error is not None
                assert e.cart_error.kind is CartErrorKind.INVALID_QUANTITY
            case Ok(_):
                pytest.fail("zero quantity accepted")
        assert store.calls["has_stock"] == 0

    async def test_remote_failure_on_check(self, store, session, shrimp):
        store.fail_next(RemoteError(RemoteErrorKind.TRANSPORT, "offline"), "has_stock")

        match await session.add(ItemKind.PRODUCT, shrimp.id):
            case Error(e):
                assert e.kind is SessionErrorKind.REMOTE
                assert e.remote_error is not None
            case Ok(_):
                pytest.fail("added without a stock answer")
        assert session.cart.is_empty


class TestWorkflow:
    async def test_full_sale(self, store, session, shrimp, soup_combo):
        await session.add(ItemKind.PRODUCT, shrimp.id, Decimal("1.5"))
        await session.add(ItemKind.COMBO, soup_combo.id, 1)
        session.cart.customer = "Don Julio"

        result = await session.checkout()

        assert isinstance(result, Ok)
        assert result.value.customer == "Don Julio"
        assert session.cart.is_empty
        assert session.catalog.fetch_count == 2
        assert len(store.sales) == 1

    async def test_remove_and_cancel(self, session, shrimp, tilapia):
        await session.add(ItemKind.PRODUCT, shrimp.id)
        await session.add(ItemKind.PRODUCT, tilapia.id)

        assert isinstance(session.remove(0), Ok)
        assert [line.item for line in session.cart.lines] == [tilapia]

        assert session.cancel() is True
        assert session.cart.is_empty

    async def test_cancel_refused_while_locked(self, session, shrimp):
        await session.add(ItemKind.PRODUCT, shrimp.id)
        session.cart.lock()

        assert session.cancel() is False
        assert len(session.cart.lines) == 1

    async def test_combo_savings(self, session, soup_combo):
        assert session.combo_savings(soup_combo.id) == Decimal("2.00")
        assert session.combo_savings(12345) is None

    async def test_low_stock_uses_configured_threshold(self, session, octopus):
        assert session.low_stock() == (octopus,)
