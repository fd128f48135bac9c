"""Shopping cart domain model.

Tracks line items, derives prices, discounts, tax and shipping on every
change, validates cart content against the catalogue, and synchronises
shopper contact data on save.
"""

from shopcart.cart.addresses import CustomerAddress
from shopcart.cart.cart import LineItem, ShoppingCart
from shopcart.cart.customer import Customer, User
from shopcart.cart.options import PaymentMethod, ShippingOption
from shopcart.cart.totals import CartTotals
from shopcart.cart.validation import ValidationReport
from shopcart.factory import build_cart

__all__ = [
    "CartTotals",
    "Customer",
    "CustomerAddress",
    "LineItem",
    "PaymentMethod",
    "ShippingOption",
    "ShoppingCart",
    "User",
    "ValidationReport",
    "build_cart",
]
