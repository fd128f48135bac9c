"""Coupon code handling for the shopping cart.

A coupon code is stored exactly as entered; it is not checked when it is
set. Whether it unlocks anything is decided on demand by the pricing rules,
which compare codes trimmed and case-insensitively, and an unknown code
simply yields no discount.
"""

from shopcart.cart.snapshot import CartSnapshot
from shopcart.pricing.port import PricingRuleProvider


def normalize_coupon_code(code: str | None) -> str | None:
    """Return the code to store, or None for a missing or blank code."""
    if code is None or not str(code).strip():
        return None
    return str(code)


def is_usable_coupon(pricing: PricingRuleProvider, snapshot: CartSnapshot) -> bool:
    """True if the snapshot's coupon code unlocks an active coupon discount."""
    if snapshot.coupon_code is None:
        return False
    return pricing.is_coupon_redeemable(snapshot, snapshot.coupon_code)
