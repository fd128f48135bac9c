"""Shipping and payment selections a customer makes on a cart."""

from pydantic import BaseModel, ConfigDict, Field


class ShippingOption(BaseModel):
    """A delivery method offered at checkout.

    The charges are consumed by the shipping rate provider; the cart itself
    only stores the selection.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    enabled: bool = True
    base_charge: float = Field(default=0.0, ge=0.0)
    charge_per_weight_unit: float = Field(default=0.0, ge=0.0)
    free_shipping_threshold: float | None = Field(default=None, ge=0.0)


class PaymentMethod(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    enabled: bool = True
