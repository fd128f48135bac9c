"""Shopping cart bounded context.

Holds the cart aggregate, its line items and addresses, and the events the
cart raises as it changes. Hosts call `shopcart.init()` once and work with
carts inside `shopcart.domain_context()`.
"""

from protean.domain import Domain

from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

shopcart = Domain(name="shopcart")
