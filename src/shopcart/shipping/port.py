"""Shipping rate provider port (abstract interface)."""

from abc import ABC, abstractmethod

from shopcart.cart.options import ShippingOption
from shopcart.cart.snapshot import CartSnapshot


class ShippingRateProvider(ABC):
    """Abstract shipping interface."""

    @abstractmethod
    def compute_shipping(self, shipping_option: ShippingOption, snapshot: CartSnapshot) -> float:
        """Return the shipping cost of the cart with the given option."""
        ...
