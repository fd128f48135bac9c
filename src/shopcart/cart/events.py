"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Boolean, Float, Identifier, Integer, Text

from shopcart.domain import shopcart


@shopcart.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the shopping cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    units = Integer(required=True)


@shopcart.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The unit count of a cart item was changed."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_units = Integer(required=True)
    new_units = Integer(required=True)


@shopcart.event(part_of="ShoppingCart")
class CartItemRemoved:
    """An item was removed from the shopping cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shopcart.event(part_of="ShoppingCart")
class CartCleared:
    """Every item was removed from the shopping cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    items_removed_count = Integer(required=True)


@shopcart.event(part_of="ShoppingCart")
class CartCouponApplied:
    __version__ = "v1"

    cart_id = Identifier(required=True)
    coupon_code = Text(required=True)
    usable = Boolean(default=False)


@shopcart.event(part_of="ShoppingCart")
class CartCouponCleared:
    __version__ = "v1"

    cart_id = Identifier(required=True)
    previous_code = Text(required=True)


@shopcart.event(part_of="ShoppingCart")
class CartSaved:
    """The cart state was persisted."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    total = Float(required=True)
    item_count = Integer(required=True)
