"""Cart factory: wires a ShoppingCart from configured adapters.

Each collaborator is built from the adapter named in `CartSettings` unless
the caller passes an instance explicitly. Explicit instances always win, so
a storefront can mix its own backends with the in-memory ones.
"""

from shopcart.activity.memory_adapter import InMemoryActivityLog
from shopcart.cart.cart import ShoppingCart
from shopcart.catalogue.fake_adapter import InMemoryCatalogue
from shopcart.config import CartSettings, get_settings
from shopcart.contacts.fake_adapter import InMemoryContacts
from shopcart.persistence.memory_adapter import InMemoryCartRepository
from shopcart.pricing.fake_adapter import InMemoryPricingRules
from shopcart.shipping.fake_adapter import OptionRateShippingProvider
from shopcart.tax.fake_adapter import RateTableTaxProvider

_ADAPTERS = {
    "catalogue": {"memory": InMemoryCatalogue},
    "pricing": {"memory": InMemoryPricingRules},
    "tax": {"memory": RateTableTaxProvider},
    "shipping": {"memory": OptionRateShippingProvider},
    "repository": {"memory": InMemoryCartRepository},
    "contacts": {"memory": InMemoryContacts},
    "activity_log": {"memory": InMemoryActivityLog},
}

_SETTING_NAMES = {
    "catalogue": "catalogue_adapter",
    "pricing": "pricing_adapter",
    "tax": "tax_adapter",
    "shipping": "shipping_adapter",
    "repository": "repository_adapter",
    "contacts": "contacts_adapter",
    "activity_log": "activity_adapter",
}


def build_adapter(collaborator: str, settings: CartSettings | None = None):
    """Instantiate the configured adapter for one collaborator."""
    settings = settings or get_settings()
    adapter = getattr(settings, _SETTING_NAMES[collaborator])
    try:
        return _ADAPTERS[collaborator][adapter]()
    except KeyError:
        raise ValueError(f"Unknown {collaborator} adapter: {adapter}") from None


def build_cart(settings: CartSettings | None = None, **overrides) -> ShoppingCart:
    """Create an empty cart.

    `overrides` may hold any `ShoppingCart.create` keyword argument; collaborators
    not given are built from settings.
    """
    settings = settings or get_settings()
    kwargs = {"currency": settings.currency}
    for collaborator in _ADAPTERS:
        if collaborator not in overrides:
            kwargs[collaborator] = build_adapter(collaborator, settings)
    kwargs.update(overrides)
    return ShoppingCart.create(**kwargs)
