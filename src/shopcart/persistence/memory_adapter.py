"""In-memory cart repository for development and testing.

Stores the last saved state per cart and hands out sequential ids to
addresses the first time they are stored. It can be configured to reject
saves, the way a database outage or constraint violation would.
"""

from itertools import count

from shopcart.persistence.port import CartRepository, CartState, SaveResult


class InMemoryCartRepository(CartRepository):
    def __init__(self) -> None:
        self.records: dict[str, CartState] = {}
        self.should_succeed: bool = True
        self.failure_reason: str = "Cart store unavailable"
        self.calls: list[str] = []
        self._address_ids = count(1)

    def configure(self, should_succeed: bool, failure_reason: str = "Cart store unavailable") -> None:
        """Configure repository behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def _store_address(self, address):
        if address is None:
            return None
        if address.address_id is not None:
            return address
        return address.duplicate(address_id=next(self._address_ids))

    def save(self, state: CartState) -> SaveResult:
        self.calls.append(state.cart_id)

        if not self.should_succeed:
            return SaveResult(success=False, cart_id=state.cart_id, failure_reason=self.failure_reason)

        billing = self._store_address(state.billing_address)
        shipping = self._store_address(state.shipping_address)
        self.records[state.cart_id] = state.model_copy(
            update={"billing_address": billing, "shipping_address": shipping}
        )

        return SaveResult(
            success=True,
            cart_id=state.cart_id,
            billing_address_id=billing.address_id if billing else None,
            shipping_address_id=shipping.address_id if shipping else None,
        )

    def get(self, cart_id: str) -> CartState | None:
        return self.records.get(str(cart_id))
