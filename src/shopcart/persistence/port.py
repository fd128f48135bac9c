"""Cart repository port (abstract interface).

Defines the contract for persisting cart state. The cart pushes a complete
`CartState` record on every explicit save; how and where it is stored is up
to the adapter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from shopcart.cart.addresses import CustomerAddress
from shopcart.cart.snapshot import LineSnapshot
from shopcart.cart.totals import CartTotals


class CartState(BaseModel):
    """Everything about a cart that survives a save."""

    model_config = ConfigDict(frozen=True)

    cart_id: str
    user_id: str | None = None
    customer_id: str | None = None
    currency: str = "USD"
    lines: tuple[LineSnapshot, ...] = ()
    coupon_code: str | None = None
    billing_address: CustomerAddress | None = None
    shipping_address: CustomerAddress | None = None
    shipping_option_id: str | None = None
    payment_method_id: str | None = None
    totals: CartTotals


@dataclass(frozen=True)
class SaveResult:
    """Result of a save attempt.

    Address ids are those under which the billing and shipping addresses
    were stored; None when the cart carries no such address.
    """

    success: bool
    cart_id: str | None = None
    billing_address_id: int | None = None
    shipping_address_id: int | None = None
    failure_reason: str | None = None


class CartRepository(ABC):
    """Abstract cart persistence interface."""

    @abstractmethod
    def save(self, state: CartState) -> SaveResult:
        """Persist `state`, inserting or replacing the record for its cart id."""
        ...

    @abstractmethod
    def get(self, cart_id: str) -> CartState | None:
        """Return the last saved state of a cart, or None if never saved."""
        ...
