"""Rate-table tax provider for development and testing.

Rates are percentages keyed by country, optionally narrowed by state. A
state rate wins over its country rate; jurisdictions without a rate are
untaxed.
"""

from shopcart.cart.addresses import CustomerAddress
from shopcart.cart.snapshot import LineSnapshot
from shopcart.exceptions import TaxUnavailableError
from shopcart.tax.port import TaxRuleProvider


class RateTableTaxProvider(TaxRuleProvider):
    def __init__(self, rates: dict[tuple[str, str | None], float] | None = None) -> None:
        self.rates: dict[tuple[str, str | None], float] = dict(rates or {})
        self.is_available: bool = True
        self.failure_reason: str = "Tax service unavailable"
        self.calls: list[dict] = []

    def configure(self, is_available: bool, failure_reason: str = "Tax service unavailable") -> None:
        self.is_available = is_available
        self.failure_reason = failure_reason

    def set_rate(self, country_id: str, rate: float, state_id: str | None = None) -> None:
        self.rates[(country_id, state_id)] = rate

    def rate_for(self, address: CustomerAddress) -> float:
        if address.state_id is not None and (address.country_id, address.state_id) in self.rates:
            return self.rates[(address.country_id, address.state_id)]
        return self.rates.get((address.country_id, None), 0.0)

    def compute_tax(self, billing_address: CustomerAddress, taxable_lines: tuple[LineSnapshot, ...]) -> float:
        self.calls.append(
            {
                "country_id": billing_address.country_id,
                "state_id": billing_address.state_id,
                "lines": [line.item_id for line in taxable_lines],
            }
        )
        if not self.is_available:
            raise TaxUnavailableError(self.failure_reason)

        rate = self.rate_for(billing_address)
        return sum(line.net_subtotal for line in taxable_lines) * rate / 100
