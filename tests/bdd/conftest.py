"""Shared BDD fixtures and step definitions for the shopping cart."""

import pytest
from pytest_bdd import given, parsers, then, when
from shopcart.cart.events import (
    CartCleared,
    CartCouponApplied,
    CartCouponCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
    CartSaved,
)


# Map event name strings to classes for dynamic lookup in Then steps
_CART_EVENT_CLASSES = {
    "CartItemAdded": CartItemAdded,
    "CartQuantityUpdated": CartQuantityUpdated,
    "CartItemRemoved": CartItemRemoved,
    "CartCleared": CartCleared,
    "CartCouponApplied": CartCouponApplied,
    "CartCouponCleared": CartCouponCleared,
    "CartSaved": CartSaved,
}


@pytest.fixture()
def error():
    """Container for errors raised by a When step."""
    return {"exc": None}


@pytest.fixture()
def report():
    """Container for the latest validation report."""
    return {"value": None}


def _line_for(cart, product_id):
    return next(item for item in cart.items if item.product_id == product_id)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart(make_cart):
    return make_cart()


@given("a cart for the signed-in default user", target_fixture="cart")
def user_cart(make_cart, default_user):
    return make_cart(user=default_user)


@given(parsers.re(r'the cart holds (?P<units>\d+) units? of "(?P<product_id>[^"]+)"'))
def cart_holds(cart, units, product_id):
    cart.add_item(product_id, int(units))
    cart._events.clear()


@given("the billing address is set to New York")
def given_billing_address(cart, address_usa):
    cart.billing_address = address_usa


@given("the standard shipping option is selected")
def given_shipping_option(cart, default_shipping_option):
    cart.shipping_option = default_shipping_option


@given(parsers.cfparse('the coupon "{code}" was entered'))
def coupon_entered(cart, code):
    cart.coupon_code = code
    cart._events.clear()


# ---------------------------------------------------------------------------
# When steps shared by several features
# ---------------------------------------------------------------------------
@when(parsers.re(r'(?P<units>-?\d+) units? of "(?P<product_id>[^"]+)" (?:is|are) added to the cart'))
def add_units(cart, units, product_id):
    cart.add_item(product_id, int(units))


@when("all items are removed from the cart")
def remove_all(cart):
    cart.remove_all_items()


@when("the billing address is set to New York")
def set_billing_address(cart, address_usa):
    cart.billing_address = address_usa


@when("the standard shipping option is selected")
def select_shipping_option(cart, default_shipping_option):
    cart.shipping_option = default_shipping_option


@when(parsers.cfparse('the coupon "{code}" is entered'))
def enter_coupon(cart, code):
    cart.coupon_code = code


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.re(r"the cart has (?P<count>\d+) items?"))
def cart_has_n_items(cart, count):
    assert len(cart.items) == int(count)


@then("the cart is empty")
def cart_is_empty(cart):
    assert cart.is_empty
    assert cart.items == []


@then(parsers.cfparse('the line for "{product_id}" holds {units:d} units'))
def line_holds(cart, product_id, units):
    assert _line_for(cart, product_id).units == units


@then(parsers.cfparse("the total price is {amount:f}"))
def total_price_is(cart, amount):
    assert cart.total_price == pytest.approx(amount)


@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in cart._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in cart._events]}"


@then("no cart event is raised")
def no_cart_event(cart):
    assert cart._events == []
