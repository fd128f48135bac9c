"""Pricing rules: per-item and order-level discounts, coupon redemption."""

from shopcart.pricing.discounts import Discount, DiscountActivation, DiscountScope
from shopcart.pricing.fake_adapter import InMemoryPricingRules
from shopcart.pricing.port import NO_ORDER_DISCOUNT, OrderDiscountQuote, PricingRuleProvider

__all__ = [
    "NO_ORDER_DISCOUNT",
    "Discount",
    "DiscountActivation",
    "DiscountScope",
    "InMemoryPricingRules",
    "OrderDiscountQuote",
    "PricingRuleProvider",
]
