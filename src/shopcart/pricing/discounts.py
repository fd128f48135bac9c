"""Discount definitions evaluated by the in-memory pricing rules.

A discount is either order-level (reduces the cart subtotal) or item-level
(reduces the lines of the products it targets). It is either always active
or gated behind one or more coupon codes.
"""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class DiscountScope(Enum):
    ORDER = "Order"
    ITEM = "Item"


class DiscountActivation(Enum):
    ALWAYS = "Always"
    COUPON = "Coupon"


class Discount(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = ""
    scope: DiscountScope = DiscountScope.ORDER
    value: float = Field(gt=0.0)
    is_percentage: bool = True
    activation: DiscountActivation = DiscountActivation.ALWAYS
    coupon_codes: frozenset[str] = frozenset()
    enabled: bool = True
    minimum_order_amount: float = Field(default=0.0, ge=0.0)
    product_ids: frozenset[str] = frozenset()  # Item discounts only; empty means every product

    @field_validator("coupon_codes", mode="before")
    @classmethod
    def normalize_codes(cls, value):
        return frozenset(str(code).strip().upper() for code in value or () if str(code).strip())

    @model_validator(mode="after")
    def percentage_cannot_exceed_hundred(self):
        if self.is_percentage and self.value > 100:
            raise ValueError("Percentage discounts cannot exceed 100")
        if self.activation == DiscountActivation.COUPON and not self.coupon_codes:
            raise ValueError("Coupon-gated discounts need at least one coupon code")
        return self

    @property
    def uses_coupons(self) -> bool:
        return self.activation == DiscountActivation.COUPON

    def redeems(self, coupon_code: str | None) -> bool:
        """True if the discount is active for the given code."""
        if not self.enabled:
            return False
        if not self.uses_coupons:
            return True
        return coupon_code is not None and coupon_code.strip().upper() in self.coupon_codes

    def applies_to(self, product_id: str) -> bool:
        return not self.product_ids or str(product_id) in self.product_ids

    def amount_for(self, base: float) -> float:
        """Absolute reduction for a base amount, never more than the base."""
        amount = base * self.value / 100 if self.is_percentage else self.value
        return min(amount, base)
