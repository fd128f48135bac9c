"""Derivation of cart totals from current lines and provider answers.

Totals are never patched incrementally. Every mutation of the cart calls
`calculate_totals` with a fresh snapshot and replaces the previous record as
a whole, so a total can never drift from the lines, coupon, addresses and
selections it was derived from.
"""

from pydantic import BaseModel, ConfigDict

from shopcart.cart.snapshot import CartSnapshot
from shopcart.exceptions import (
    PricingUnavailableError,
    ShippingUnavailableError,
    TaxUnavailableError,
    translate_errors,
)
from shopcart.pricing.port import NO_ORDER_DISCOUNT, OrderDiscountQuote, PricingRuleProvider
from shopcart.shipping.port import ShippingRateProvider
from shopcart.tax.port import TaxRuleProvider
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


def _money(amount: float) -> float:
    return round(amount, 2)


class CartTotals(BaseModel):
    """Financial summary of a cart: subtotal, discounts, tax, shipping and grand total.

    `subtotal` is already net of per-item discounts, which are reported
    separately in `item_discount` and per line in `line_discounts`.
    """

    model_config = ConfigDict(frozen=True)

    gross_subtotal: float = 0.0
    item_discount: float = 0.0
    subtotal: float = 0.0
    order_discount: float = 0.0
    tax: float = 0.0
    shipping: float = 0.0
    total: float = 0.0
    currency: str = "USD"
    line_discounts: dict[str, float] = {}
    order_discount_quote: OrderDiscountQuote = NO_ORDER_DISCOUNT

    @property
    def total_discount(self) -> float:
        return _money(self.item_discount + self.order_discount)


def calculate_totals(
    snapshot: CartSnapshot,
    pricing: PricingRuleProvider,
    tax: TaxRuleProvider,
    shipping: ShippingRateProvider,
) -> CartTotals:
    """Derive the totals of `snapshot` from the rule providers.

    Provider failures surface as the matching `CollaboratorUnavailableError`.
    """
    if not snapshot.lines:
        return CartTotals(currency=snapshot.currency)

    gross_subtotal = sum(line.subtotal for line in snapshot.lines)

    with translate_errors(PricingUnavailableError):
        discounted = snapshot.with_discounts(pricing.per_item_discounts(snapshot))
    line_discounts = {line.item_id: _money(line.discount) for line in discounted.lines if line.discount}
    subtotal = discounted.subtotal

    with translate_errors(PricingUnavailableError):
        quote = pricing.order_discount(discounted, snapshot.coupon_code)
    order_discount = quote.reduction_for(subtotal)

    tax_amount = 0.0
    taxable_lines = discounted.taxable_lines
    if snapshot.billing_address is not None and taxable_lines:
        with translate_errors(TaxUnavailableError):
            tax_amount = tax.compute_tax(snapshot.billing_address, taxable_lines)

    shipping_cost = 0.0
    if snapshot.shipping_option is not None and discounted.is_shipping_needed:
        with translate_errors(ShippingUnavailableError):
            shipping_cost = shipping.compute_shipping(snapshot.shipping_option, discounted)

    gross_subtotal, subtotal = _money(gross_subtotal), _money(subtotal)
    order_discount, tax_amount, shipping_cost = _money(order_discount), _money(tax_amount), _money(shipping_cost)

    totals = CartTotals(
        gross_subtotal=gross_subtotal,
        item_discount=_money(gross_subtotal - subtotal),
        subtotal=subtotal,
        order_discount=order_discount,
        tax=tax_amount,
        shipping=shipping_cost,
        total=_money(subtotal - order_discount + tax_amount + shipping_cost),
        currency=snapshot.currency,
        line_discounts=line_discounts,
        order_discount_quote=quote,
    )

    logger.debug(
        "Cart totals recalculated",
        cart_id=snapshot.cart_id,
        subtotal=totals.subtotal,
        order_discount=totals.order_discount,
        tax=totals.tax,
        shipping=totals.shipping,
        total=totals.total,
    )
    return totals
