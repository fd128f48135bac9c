"""Option-driven shipping rates for development and testing.

Cost is the option's base charge plus its per-weight charge for the
shippable weight of the cart. Carts whose subtotal reaches the option's free
shipping threshold ship for free.
"""

from shopcart.cart.options import ShippingOption
from shopcart.cart.snapshot import CartSnapshot
from shopcart.exceptions import ShippingUnavailableError
from shopcart.shipping.port import ShippingRateProvider


class OptionRateShippingProvider(ShippingRateProvider):
    def __init__(self) -> None:
        self.is_available: bool = True
        self.failure_reason: str = "Shipping service unavailable"
        self.calls: list[dict] = []

    def configure(self, is_available: bool, failure_reason: str = "Shipping service unavailable") -> None:
        self.is_available = is_available
        self.failure_reason = failure_reason

    def compute_shipping(self, shipping_option: ShippingOption, snapshot: CartSnapshot) -> float:
        self.calls.append(
            {
                "shipping_option_id": shipping_option.id,
                "cart_id": snapshot.cart_id,
                "weight": snapshot.total_weight,
            }
        )
        if not self.is_available:
            raise ShippingUnavailableError(self.failure_reason)

        threshold = shipping_option.free_shipping_threshold
        if threshold is not None and snapshot.subtotal >= threshold:
            return 0.0

        return shipping_option.base_charge + shipping_option.charge_per_weight_unit * snapshot.total_weight
