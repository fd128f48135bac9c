"""Read-only view of a cart handed to the pricing, tax and shipping providers.

Providers never see the live aggregate. They receive a frozen snapshot of
the lines and selections so nothing they do can leak back into cart state.
"""

from pydantic import BaseModel, ConfigDict

from shopcart.cart.addresses import CustomerAddress
from shopcart.cart.options import PaymentMethod, ShippingOption


class LineSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: str
    product_id: str
    name: str
    units: int
    unit_price: float
    discount: float = 0.0
    requires_shipping: bool = True
    taxable: bool = False
    weight: float = 0.0

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.units

    @property
    def net_subtotal(self) -> float:
        return max(self.subtotal - self.discount, 0.0)


class CartSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    cart_id: str
    currency: str = "USD"
    lines: tuple[LineSnapshot, ...] = ()
    coupon_code: str | None = None
    billing_address: CustomerAddress | None = None
    shipping_address: CustomerAddress | None = None
    shipping_option: ShippingOption | None = None
    payment_method: PaymentMethod | None = None

    @property
    def subtotal(self) -> float:
        """Sum of line subtotals after per-item discounts."""
        return sum(line.net_subtotal for line in self.lines)

    @property
    def total_units(self) -> int:
        return sum(line.units for line in self.lines)

    @property
    def total_weight(self) -> float:
        return sum(line.weight * line.units for line in self.lines if line.requires_shipping)

    @property
    def is_shipping_needed(self) -> bool:
        return any(line.requires_shipping for line in self.lines)

    @property
    def taxable_lines(self) -> tuple[LineSnapshot, ...]:
        return tuple(line for line in self.lines if line.taxable)

    def with_discounts(self, discounts: dict[str, float]) -> "CartSnapshot":
        """Return a copy whose lines carry the given per-item discounts."""
        lines = tuple(
            line.model_copy(update={"discount": min(max(discounts.get(line.item_id, 0.0), 0.0), line.subtotal)})
            for line in self.lines
        )
        return self.model_copy(update={"lines": lines})
