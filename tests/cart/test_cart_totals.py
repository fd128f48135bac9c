"""Tests for cart price, discount, tax and shipping derivation."""

import pytest
from shopcart.pricing.discounts import Discount, DiscountActivation, DiscountScope


def _assert_total_consistent(cart):
    expected = cart.subtotal - cart.order_discount + cart.total_tax + cart.shipping
    assert cart.total_price == pytest.approx(expected)


class TestSubtotal:
    def test_empty_cart_totals_are_zero(self, cart):
        assert cart.subtotal == 0.0
        assert cart.total_tax == 0.0
        assert cart.shipping == 0.0
        assert cart.total_price == 0.0

    @pytest.mark.parametrize("units", [1, 5])
    def test_item_subtotal_is_unit_price_times_units(self, cart, units):
        item = cart.add_item("sku-available", units)
        assert item.unit_price == 10.0
        assert item.subtotal == 10.0 * units

    def test_total_price_sums_lines(self, cart):
        cart.add_item("sku-available", 2)
        cart.add_item("sku-limited", 1)
        assert cart.subtotal == 40.0
        assert cart.total_price == 40.0

    def test_totals_record_carries_currency(self, make_cart):
        cart = make_cart(currency="EUR")
        cart.add_item("sku-available")
        assert cart.totals.currency == "EUR"


class TestTax:
    def test_no_tax_without_billing_address(self, cart):
        cart.add_item("sku-taxed")
        assert cart.total_tax == 0.0
        assert cart.total_price == 100.0

    def test_tax_with_billing_address(self, cart, address_usa):
        cart.add_item("sku-taxed")
        cart.billing_address = address_usa
        assert cart.total_tax == 10.0
        assert cart.total_price == 110.0

    def test_non_taxable_items_are_not_taxed(self, cart, address_usa, tax):
        cart.billing_address = address_usa
        cart.add_item("sku-available", 3)
        assert cart.total_tax == 0.0
        assert tax.calls == []

    def test_tax_drops_to_zero_when_taxable_items_leave(self, cart, address_usa):
        cart.add_item("sku-taxed")
        cart.billing_address = address_usa
        assert cart.total_tax > 0

        cart.remove_all_items()
        cart.add_item("sku-available")

        assert cart.billing_address is not None
        assert cart.total_tax == 0

    def test_country_rate_applies_without_state_rate(self, cart, address_usa):
        cart.add_item("sku-taxed")
        address_usa.state_id = "CA"
        cart.billing_address = address_usa
        assert cart.total_tax == 8.0

    def test_clearing_billing_address_removes_tax(self, cart, address_usa):
        cart.add_item("sku-taxed")
        cart.billing_address = address_usa
        cart.billing_address = None
        assert cart.total_tax == 0.0

    def test_editing_owned_address_is_seen_on_recalculate(self, cart, address_usa):
        cart.add_item("sku-taxed")
        cart.billing_address = address_usa

        cart.billing_address.state_id = "CA"
        totals = cart.recalculate()

        assert totals.tax == 8.0
        assert cart.total_tax == 8.0

    def test_tax_is_charged_on_undiscounted_order_amount(self, cart, address_usa, order_coupon_code):
        cart.add_item("sku-taxed")
        cart.billing_address = address_usa
        cart.coupon_code = order_coupon_code

        assert cart.order_discount == 10.0
        assert cart.total_tax == 10.0
        assert cart.total_price == 100.0


class TestShipping:
    def test_shipping_is_zero_without_option(self, cart):
        cart.add_item("sku-available", 2)
        assert cart.shipping == 0.0

    def test_shipping_cost_from_option(self, cart, default_shipping_option):
        cart.add_item("sku-available", 2)
        cart.shipping_option = default_shipping_option

        # 5.00 base + 0.50 per weight unit * 2 units * 1.0 weight
        assert cart.shipping == 6.0
        assert cart.total_price == 26.0

    def test_shipping_follows_unit_changes(self, cart, default_shipping_option):
        item = cart.add_item("sku-available", 2)
        cart.shipping_option = default_shipping_option
        cart.update_quantity(item.id, 4)
        assert cart.shipping == 7.0

    def test_no_shipping_cost_when_shipping_not_needed(self, cart, default_shipping_option, shipping):
        cart.add_item("sku-digital")
        cart.shipping_option = default_shipping_option
        assert cart.shipping == 0.0
        assert shipping.calls == []


class TestDiscounts:
    def test_per_item_discount_reduces_subtotal(self, cart, pricing):
        pricing.add(
            Discount(
                scope=DiscountScope.ITEM,
                value=20.0,
                is_percentage=True,
                product_ids={"sku-available"},
            )
        )
        item = cart.add_item("sku-available", 2)
        cart.add_item("sku-limited", 1)

        assert item.discount == 4.0
        assert item.net_subtotal == 16.0
        assert cart.subtotal == 36.0
        assert cart.totals.item_discount == 4.0
        assert cart.total_price == 36.0

    def test_item_and_order_discounts_add_up(self, cart, pricing, order_coupon_code):
        pricing.add(Discount(scope=DiscountScope.ITEM, value=20.0, is_percentage=True))
        cart.add_item("sku-available", 2)
        cart.coupon_code = order_coupon_code

        assert cart.subtotal == 16.0
        assert cart.order_discount == 1.6
        assert cart.total_discount == 5.6
        assert cart.total_price == pytest.approx(14.4)

    def test_fixed_order_discount_never_exceeds_subtotal(self, cart, pricing):
        pricing.add(Discount(scope=DiscountScope.ORDER, value=500.0, is_percentage=False))
        cart.add_item("sku-available", 1)
        assert cart.order_discount == 10.0
        assert cart.total_price == 0.0

    def test_minimum_order_amount_gates_discount(self, cart, pricing):
        pricing.add(
            Discount(
                scope=DiscountScope.ORDER,
                value=5.0,
                is_percentage=False,
                activation=DiscountActivation.ALWAYS,
                minimum_order_amount=50.0,
            )
        )
        item = cart.add_item("sku-available", 1)
        assert cart.order_discount == 0.0

        cart.update_quantity(item.id, 5)
        assert cart.order_discount == 5.0
        assert cart.total_price == 45.0

    def test_removing_items_removes_item_discount(self, cart, pricing):
        pricing.add(Discount(scope=DiscountScope.ITEM, value=50.0, is_percentage=True))
        item = cart.add_item("sku-available", 2)
        cart.remove_item(item.id)
        assert cart.totals.item_discount == 0.0
        assert cart.totals.line_discounts == {}


class TestTotalInvariant:
    def test_total_matches_components_after_every_mutation(
        self, cart, pricing, address_usa, default_shipping_option, order_coupon_code
    ):
        pricing.add(Discount(scope=DiscountScope.ITEM, value=3.0, is_percentage=False, product_ids={"sku-taxed"}))

        taxed = cart.add_item("sku-taxed", 1)
        _assert_total_consistent(cart)
        cart.add_item("sku-available", 3)
        _assert_total_consistent(cart)
        cart.billing_address = address_usa
        _assert_total_consistent(cart)
        cart.shipping_option = default_shipping_option
        _assert_total_consistent(cart)
        cart.coupon_code = order_coupon_code
        _assert_total_consistent(cart)
        cart.update_quantity(taxed.id, 3)
        _assert_total_consistent(cart)
        cart.coupon_code = None
        _assert_total_consistent(cart)
        cart.remove_item(taxed.id)
        _assert_total_consistent(cart)

        assert cart.total_price > 0
