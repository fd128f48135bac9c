import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture
from shopcart.activity.memory_adapter import InMemoryActivityLog
from shopcart.cart.addresses import CustomerAddress
from shopcart.cart.cart import ShoppingCart
from shopcart.cart.customer import Customer, User
from shopcart.cart.options import PaymentMethod, ShippingOption
from shopcart.catalogue.fake_adapter import InMemoryCatalogue
from shopcart.catalogue.port import CatalogueEntry
from shopcart.config import reset_settings
from shopcart.contacts.fake_adapter import InMemoryContacts
from shopcart.persistence.memory_adapter import InMemoryCartRepository
from shopcart.pricing.discounts import Discount, DiscountActivation, DiscountScope
from shopcart.pricing.fake_adapter import InMemoryPricingRules
from shopcart.shipping.fake_adapter import OptionRateShippingProvider
from shopcart.tax.fake_adapter import RateTableTaxProvider

ORDER_COUPON_CODE = "OrderCouponCode"


def pytest_sessionstart(session):  # noqa: ARG001
    """Run the suite against test settings."""
    os.environ["SHOPCART_ENVIRONMENT"] = "test"
    reset_settings()


def pytest_collection_modifyitems(config, items):  # noqa: ARG001
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/cart/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/adapters/" in test_path:
            item.add_marker(pytest.mark.adapters)


@pytest.fixture(scope="session")
def shopcart_bed():
    from shopcart.domain import shopcart

    bed = DomainFixture(shopcart)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(shopcart_bed):
    with shopcart_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    return InMemoryCatalogue(
        [
            CatalogueEntry(product_id="sku-available", name="Available product", unit_price=10.0, weight=1.0),
            CatalogueEntry(product_id="sku-limited", name="Limited product", unit_price=20.0, max_units=10),
            CatalogueEntry(product_id="sku-disabled", name="Disabled product", unit_price=5.0, sellable=False),
            CatalogueEntry(product_id="sku-taxed", name="Taxed product", unit_price=100.0, taxable=True, weight=2.0),
            CatalogueEntry(product_id="sku-digital", name="Digital product", unit_price=15.0, requires_shipping=False),
        ]
    )


# ---------------------------------------------------------------------------
# Rule providers
# ---------------------------------------------------------------------------
@pytest.fixture()
def order_coupon_code():
    return ORDER_COUPON_CODE


@pytest.fixture()
def order_discount():
    return Discount(
        name="Order coupon discount",
        scope=DiscountScope.ORDER,
        value=10.0,
        is_percentage=True,
        activation=DiscountActivation.COUPON,
        coupon_codes={ORDER_COUPON_CODE},
    )


@pytest.fixture()
def pricing(order_discount):
    return InMemoryPricingRules([order_discount])


@pytest.fixture()
def tax():
    return RateTableTaxProvider({("US", None): 8.0, ("US", "NY"): 10.0})


@pytest.fixture()
def shipping():
    return OptionRateShippingProvider()


# ---------------------------------------------------------------------------
# Persistence, contacts and activities
# ---------------------------------------------------------------------------
@pytest.fixture()
def repository():
    return InMemoryCartRepository()


@pytest.fixture()
def contacts():
    return InMemoryContacts()


@pytest.fixture()
def activity_log():
    return InMemoryActivityLog()


# ---------------------------------------------------------------------------
# Shopper data and selections
# ---------------------------------------------------------------------------
@pytest.fixture()
def address_usa():
    return CustomerAddress(
        personal_name="John Doe",
        line1="1 Main Street",
        line2="Apartment 2",
        city="New York",
        postal_code="10001",
        country_id="US",
        state_id="NY",
    )


@pytest.fixture()
def default_shipping_option():
    return ShippingOption(id="ship-standard", name="Standard", base_charge=5.0, charge_per_weight_unit=0.5)


@pytest.fixture()
def default_payment_method():
    return PaymentMethod(id="pay-card", name="Credit card")


@pytest.fixture()
def customer_anonymous():
    return Customer(first_name="Jane", last_name="Buyer", email="jane.buyer@example.com")


@pytest.fixture()
def default_user():
    return User(id="user-001", email="default.user@example.com", first_name="Default", last_name="User")


# ---------------------------------------------------------------------------
# Carts
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_cart(catalogue, pricing, tax, shipping, repository, contacts, activity_log):
    def _make(**kwargs):
        collaborators = {
            "catalogue": catalogue,
            "pricing": pricing,
            "tax": tax,
            "shipping": shipping,
            "repository": repository,
            "contacts": contacts,
            "activity_log": activity_log,
        }
        collaborators.update(kwargs)
        return ShoppingCart.create(**collaborators)

    return _make


@pytest.fixture()
def cart(make_cart):
    return make_cart()
