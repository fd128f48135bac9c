"""Shipping rates: cost of delivering a cart with a chosen option."""

from shopcart.shipping.fake_adapter import OptionRateShippingProvider
from shopcart.shipping.port import ShippingRateProvider

__all__ = ["OptionRateShippingProvider", "ShippingRateProvider"]
