"""Cart persistence: saving cart and address state."""

from shopcart.persistence.memory_adapter import InMemoryCartRepository
from shopcart.persistence.port import CartRepository, CartState, SaveResult

__all__ = ["CartRepository", "CartState", "InMemoryCartRepository", "SaveResult"]
