"""Catalogue lookup port (abstract interface).

The cart never reads product records directly. It resolves a product id to
the sellable state it needs through this port, so the storefront can plug
in whatever catalogue backend it runs on.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


class CatalogueEntry(BaseModel):
    """Sellable state of a single SKU as seen by the cart."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    unit_price: float = Field(ge=0.0)
    sellable: bool = True
    max_units: int | None = Field(default=None, ge=0)  # Per-order ceiling
    min_units: int = Field(default=1, ge=1)
    available_units: int | None = None  # None when stock is not tracked
    requires_shipping: bool = True
    taxable: bool = False
    weight: float = Field(default=0.0, ge=0.0)

    @property
    def allowed_units(self) -> int | None:
        """Highest unit count a single order may hold, or None if unlimited."""
        ceilings = [c for c in (self.max_units, self.available_units) if c is not None]
        return min(ceilings) if ceilings else None


class CatalogueLookup(ABC):
    """Abstract catalogue interface."""

    @abstractmethod
    def resolve(self, product_id: str) -> CatalogueEntry | None:
        """Return the entry for `product_id`, or None if it does not exist.

        Infrastructure failures raise `CatalogueUnavailableError`.
        """
        ...
