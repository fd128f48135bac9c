"""Tax rules: tax owed for a billing address and taxable lines."""

from shopcart.tax.fake_adapter import RateTableTaxProvider
from shopcart.tax.port import TaxRuleProvider

__all__ = ["RateTableTaxProvider", "TaxRuleProvider"]
