"""In-memory pricing rules for development and testing.

Evaluates a list of `Discount` definitions against a cart snapshot:

- item discounts reduce each targeted line; the best one per line wins;
- order discounts reduce the subtotal left after item discounts; the single
  best usable one is quoted;
- a coupon is redeemable when it unlocks an enabled coupon-gated discount
  whose minimum order amount the cart meets.
"""

from shopcart.cart.snapshot import CartSnapshot
from shopcart.exceptions import PricingUnavailableError
from shopcart.pricing.discounts import Discount, DiscountScope
from shopcart.pricing.port import NO_ORDER_DISCOUNT, OrderDiscountQuote, PricingRuleProvider


class InMemoryPricingRules(PricingRuleProvider):
    """Configurable discount engine backed by a list of discounts."""

    def __init__(self, discounts: list[Discount] | None = None) -> None:
        self.discounts: list[Discount] = list(discounts or [])
        self.is_available: bool = True
        self.failure_reason: str = "Pricing service unavailable"
        self.calls: list[dict] = []

    def configure(self, is_available: bool, failure_reason: str = "Pricing service unavailable") -> None:
        self.is_available = is_available
        self.failure_reason = failure_reason

    def add(self, discount: Discount) -> Discount:
        self.discounts.append(discount)
        return discount

    def _check_available(self, method: str, **details) -> None:
        self.calls.append({"method": method, **details})
        if not self.is_available:
            raise PricingUnavailableError(self.failure_reason)

    def _usable(self, scope: DiscountScope, snapshot: CartSnapshot, coupon_code: str | None) -> list[Discount]:
        return [
            discount
            for discount in self.discounts
            if discount.scope == scope
            and discount.redeems(coupon_code)
            and snapshot.subtotal >= discount.minimum_order_amount
        ]

    def per_item_discounts(self, snapshot: CartSnapshot) -> dict[str, float]:
        self._check_available("per_item_discounts", cart_id=snapshot.cart_id)

        item_discounts = self._usable(DiscountScope.ITEM, snapshot, snapshot.coupon_code)
        result = {}
        for line in snapshot.lines:
            amounts = [d.amount_for(line.subtotal) for d in item_discounts if d.applies_to(line.product_id)]
            if amounts:
                result[line.item_id] = max(amounts)
        return result

    def order_discount(self, snapshot: CartSnapshot, coupon_code: str | None) -> OrderDiscountQuote:
        self._check_available("order_discount", cart_id=snapshot.cart_id, coupon_code=coupon_code)

        candidates = self._usable(DiscountScope.ORDER, snapshot, coupon_code)
        if not candidates:
            return NO_ORDER_DISCOUNT

        best = max(candidates, key=lambda d: d.amount_for(snapshot.subtotal))
        return OrderDiscountQuote(
            usable=True,
            amount=best.value,
            is_percentage=best.is_percentage,
            discount_id=best.id,
            name=best.name,
        )

    def is_coupon_redeemable(self, snapshot: CartSnapshot, coupon_code: str) -> bool:
        self._check_available("is_coupon_redeemable", cart_id=snapshot.cart_id, coupon_code=coupon_code)

        return any(
            discount.uses_coupons
            and discount.redeems(coupon_code)
            and snapshot.subtotal >= discount.minimum_order_amount
            for discount in self.discounts
        )
