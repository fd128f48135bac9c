"""Pricing rule provider port (abstract interface).

Answers which discounts apply to a cart. The cart does not know how
discounts are authored or stored; it only applies the answers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from shopcart.cart.snapshot import CartSnapshot


@dataclass(frozen=True)
class OrderDiscountQuote:
    """Order-level discount applicable to a cart.

    `amount` is a percentage of the subtotal when `is_percentage` is set,
    otherwise an absolute amount in the cart currency.
    """

    usable: bool
    amount: float = 0.0
    is_percentage: bool = False
    discount_id: str | None = None
    name: str | None = None

    def reduction_for(self, subtotal: float) -> float:
        if not self.usable or subtotal <= 0:
            return 0.0
        reduction = subtotal * self.amount / 100 if self.is_percentage else self.amount
        return min(max(reduction, 0.0), subtotal)


NO_ORDER_DISCOUNT = OrderDiscountQuote(usable=False)


class PricingRuleProvider(ABC):
    """Abstract pricing interface."""

    @abstractmethod
    def per_item_discounts(self, snapshot: CartSnapshot) -> dict[str, float]:
        """Map line item id to the discount for that whole line."""
        ...

    @abstractmethod
    def order_discount(self, snapshot: CartSnapshot, coupon_code: str | None) -> OrderDiscountQuote:
        """Return the order-level discount for the cart and current coupon code."""
        ...

    @abstractmethod
    def is_coupon_redeemable(self, snapshot: CartSnapshot, coupon_code: str) -> bool:
        """True if `coupon_code` currently unlocks at least one active discount."""
        ...
