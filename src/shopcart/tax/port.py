"""Tax rule provider port (abstract interface)."""

from abc import ABC, abstractmethod

from shopcart.cart.addresses import CustomerAddress
from shopcart.cart.snapshot import LineSnapshot


class TaxRuleProvider(ABC):
    """Abstract tax interface."""

    @abstractmethod
    def compute_tax(self, billing_address: CustomerAddress, taxable_lines: tuple[LineSnapshot, ...]) -> float:
        """Return the tax owed on `taxable_lines` for the billing jurisdiction.

        Lines are priced after per-item discounts (`net_subtotal`).
        """
        ...
