"""Customer address held by a shopping cart.

Unlike the immutable addresses captured on an order, a cart address is a
mutable entity owned by the cart: the cart keeps its own copy of whatever is
assigned to it, and edits made through that copy are what gets persisted
on save.
"""

from protean.fields import Integer, String

from shopcart.domain import shopcart

_ADDRESS_FIELDS = (
    "address_id",
    "personal_name",
    "line1",
    "line2",
    "city",
    "postal_code",
    "country_id",
    "state_id",
)


@shopcart.entity(part_of="ShoppingCart")
class CustomerAddress:
    """A billing or shipping address attached to a cart."""

    address_id = Integer()  # Assigned by the cart repository on save
    personal_name = String(max_length=200)
    line1 = String(required=True, max_length=255)
    line2 = String(max_length=255)
    city = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country_id = String(required=True, max_length=100)
    state_id = String(max_length=100)

    def duplicate(self, **changes) -> "CustomerAddress":
        """An independent copy of this address, with `changes` applied."""
        values = {name: getattr(self, name) for name in _ADDRESS_FIELDS}
        values.update(changes)
        return CustomerAddress(**values)
