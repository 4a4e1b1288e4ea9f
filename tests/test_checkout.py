"""
Tests for checkout: hard stops, submission, reconciliation.
"""

import asyncio
import logging
from decimal import Decimal

import pytest
from kungfu import Ok, Error, LazyCoroResult

from lonja.cart import Cart, CartErrorKind
from lonja.checkout import CheckoutErrorKind, CheckoutErrors, build_sale_request
from lonja.domain import ItemKind, Product, SaleType
from lonja.remote import RemoteError, RemoteErrorKind


def network_calls(store) -> int:
    return sum(store.calls.values())


class TestHardStops:
    async def test_missing_customer(self, store, checkout, shrimp):
        cart = Cart(customer="   ")
        cart.add(shrimp, 1)

        result = await checkout.run(cart)

        assert result == Error(CheckoutErrors.missing_customer())
        assert network_calls(store) == 0
        assert len(cart.lines) == 1

    async def test_empty_cart(self, store, checkout, cart):
        result = await checkout.run(cart)

        match result:
            case Error(e):
                assert e.kind is CheckoutErrorKind.EMPTY_CART
                assert e.is_validation
            case Ok(_):
                pytest.fail("empty cart checked out")
        assert network_calls(store) == 0

    async def test_customer_checked_before_items(self, checkout):
        result = await checkout.run(Cart())

        match result:
            case Error(e):
                assert e.kind is CheckoutErrorKind.MISSING_CUSTOMER
            case Ok(_):
                pytest.fail("checkout without customer")

    async def test_insufficient_stock_names_first_short_line(self, store, checkout, cart, shrimp, octopus):
        cart.add(shrimp, 1)
        cart.add(octopus, 6)

        result = await checkout.run(cart)

        match result:
            case Error(e):
                assert e.kind is CheckoutErrorKind.INSUFFICIENT_STOCK
                assert e.line is not None and e.line.item == octopus
                assert "Pulpo" in e.user_message
            case Ok(_):
                pytest.fail("oversold octopus")
        assert store.calls["create_sale"] == 0
        assert len(cart.lines) == 2
        assert not cart.locked

    async def test_lines_drawing_on_the_same_product_are_summed(self, store, checkout, cart, shrimp, soup_combo):
        """20 lb of shrimp plus a soup combo needs 21 lb; 20 are in stock."""
        cart.add(shrimp, 20)
        cart.add(soup_combo, 1)

        result = await checkout.run(cart)

        match result:
            case Error(e):
                assert e.kind is CheckoutErrorKind.INSUFFICIENT_STOCK
                assert e.line is not None and e.line.item == shrimp
            case Ok(_):
                pytest.fail("shrimp oversold across lines")
        assert store.calls["create_sale"] == 0


class TestSubmission:
    async def test_success_returns_server_record_and_resets_cart(self, store, checkout, cart, shrimp, soup_combo):
        cart.notes = "para llevar"
        cart.add(shrimp, Decimal("2"))
        cart.add(soup_combo, 1)

        result = await checkout.run(cart)

        assert isinstance(result, Ok)
        sale = result.value
        assert sale.customer == "Rosa Méndez"
        assert sale.total == Decimal("30.00")
        assert sale.type is SaleType.NORMAL
        assert [d.kind for d in sale.details] == [ItemKind.PRODUCT, ItemKind.COMBO]
        assert cart.is_empty
        assert cart.customer == ""
        assert not cart.locked

    async def test_success_refreshes_catalog_exactly_once(self, store, checkout, catalog, cart, shrimp):
        cart.add(shrimp, Decimal("5"))

        await checkout.run(cart)

        assert catalog.fetch_count == 1
        assert store.calls["list_active_products"] == 1
        assert store.calls["list_active_combos"] == 1
        refreshed = catalog.find(ItemKind.PRODUCT, shrimp.id)
        assert refreshed is not None and refreshed.stock_lb == Decimal("15")

    async def test_server_total_is_authoritative(self, store, checkout, cart, shrimp):
        """Cart priced with a stale copy; the sale carries the server price."""
        stale = Product(id=shrimp.id, name=shrimp.name, price_per_lb=Decimal("7.00"), stock_lb=shrimp.stock_lb)
        cart.add(stale, 2)

        result = await checkout.run(cart)

        assert isinstance(result, Ok)
        assert result.value.total == Decimal("17.00")

    async def test_request_carries_no_prices(self, cart, shrimp, soup_combo):
        cart.add(shrimp, Decimal("1.25"))
        cart.add(soup_combo, 2)
        cart.notes = "  sin hielo "

        request = build_sale_request(cart)

        assert request.customer == "Rosa Méndez"
        assert request.notes == "sin hielo"
        assert request.type is SaleType.NORMAL
        assert [(l.kind, l.item_id, l.quantity) for l in request.lines] == [
            (ItemKind.PRODUCT, shrimp.id, Decimal("1.25")),
            (ItemKind.COMBO, soup_combo.id, Decimal("2")),
        ]
        assert not any(hasattr(l, "price") or hasattr(l, "unit_price") for l in request.lines)


class TestRemoteFailures:
    async def test_server_rejection_keeps_cart(self, store, checkout, cart, shrimp):
        store.fail_next(RemoteError(RemoteErrorKind.REJECTED, "stock insuficiente", status=409), "create_sale")
        cart.add(shrimp, 1)

        result = await checkout.run(cart)

        match result:
            case Error(e):
                assert e.kind is CheckoutErrorKind.REJECTED
                assert e.is_retryable
                assert not e.is_validation
                assert e.cause is not None and e.cause.status == 409
            case Ok(_):
                pytest.fail("rejected sale reported as success")
        assert len(cart.lines) == 1
        assert cart.customer == "Rosa Méndez"
        assert not cart.locked
        assert store.calls["list_active_products"] == 0

    async def test_stock_race_caught_by_server(self, store, checkout, cart, shrimp):
        """Client check passes, another seller takes the stock before submit."""
        cart.add(shrimp, Decimal("15"))
        original_has_stock = store.has_stock

        def has_stock_then_sell(kind, item_id, quantity):
            result = original_has_stock(kind, item_id, quantity)

            async def run():
                outcome = await result
                store.products[shrimp.id] = Product(
                    id=shrimp.id, name=shrimp.name, price_per_lb=shrimp.price_per_lb, stock_lb=Decimal("3"),
                )
                return outcome
            return LazyCoroResult(run)

        store.has_stock = has_stock_then_sell

        result = await checkout.run(cart)

        match result:
            case Error(e):
                assert e.kind is CheckoutErrorKind.REJECTED
            case Ok(_):
                pytest.fail("server accepted an oversold sale")
        assert len(cart.lines) == 1

    @pytest.mark.parametrize("kind", [RemoteErrorKind.TIMEOUT, RemoteErrorKind.TRANSPORT])
    async def test_unreachable_has_distinct_message(self, store, checkout, cart, shrimp, kind):
        store.fail_next(RemoteError(kind, "down"), "create_sale")
        cart.add(shrimp, 1)

        result = await checkout.run(cart)

        match result:
            case Error(e):
                assert e.kind is CheckoutErrorKind.UNREACHABLE
                assert "reach the server" in e.user_message
            case Ok(_):
                pytest.fail("expected transport failure")
        assert len(cart.lines) == 1

    async def test_stock_check_failure_is_remote_error(self, store, checkout, cart, shrimp):
        store.fail_next(RemoteError(RemoteErrorKind.SERVER, "boom", status=500), "has_stock")
        cart.add(shrimp, 1)

        result = await checkout.run(cart)

        match result:
            case Error(e):
                assert e.kind is CheckoutErrorKind.SERVER
            case Ok(_):
                pytest.fail("expected server error")
        assert store.calls["create_sale"] == 0

    async def test_refresh_failure_does_not_undo_sale(self, store, checkout, cart, shrimp, caplog):
        store.fail_next(RemoteError(RemoteErrorKind.TIMEOUT, "slow"), "list_active_combos")
        cart.add(shrimp, 1)

        with caplog.at_level(logging.WARNING, logger="lonja"):
            result = await checkout.run(cart)

        assert isinstance(result, Ok)
        assert cart.is_empty
        assert "refresh after sale failed" in caplog.text


class TestInFlight:
    async def test_second_checkout_while_first_is_running(self, store, checkout, cart, shrimp):
        cart.add(shrimp, 1)

        first = asyncio.create_task(checkout.run(cart))
        await asyncio.sleep(0)
        assert cart.locked

        calls_before = network_calls(store)
        second = await checkout.run(cart)
        assert network_calls(store) == calls_before

        match second:
            case Error(e):
                assert e.kind is CheckoutErrorKind.IN_FLIGHT
            case Ok(_):
                pytest.fail("two checkouts for one cart")

        assert isinstance(await first, Ok)
        assert store.calls["create_sale"] == 1

    async def test_cart_is_frozen_while_submitting(self, checkout, cart, shrimp, tilapia):
        cart.add(shrimp, 1)

        task = asyncio.create_task(checkout.run(cart))
        await asyncio.sleep(0)

        match cart.add(tilapia, 1):
            case Error(e):
                assert e.kind is CartErrorKind.LOCKED
            case Ok(_):
                pytest.fail("cart changed mid-checkout")
        await task

    async def test_sale_goes_out_as_read_when_checkout_started(self, store, checkout, cart, shrimp):
        cart.notes = "para llevar"
        cart.add(shrimp, 1)

        task = asyncio.create_task(checkout.run(cart))
        await asyncio.sleep(0)
        cart.customer = ""
        cart.notes = "otra cosa"

        result = await task

        match result:
            case Ok(sale):
                assert sale.customer == "Rosa Méndez"
                assert sale.notes == "para llevar"
            case Error(e):
                pytest.fail(f"sale lost its customer: {e}")

    async def test_cancelled_checkout_leaves_cart_usable(self, store, checkout, cart, shrimp):
        cart.add(shrimp, 1)

        task = asyncio.create_task(checkout.run(cart))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert not cart.locked
        assert len(cart.lines) == 1
        assert store.sales == []
