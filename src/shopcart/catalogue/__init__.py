"""Catalogue lookup: resolves products to their sellable state."""

from shopcart.catalogue.fake_adapter import InMemoryCatalogue
from shopcart.catalogue.port import CatalogueEntry, CatalogueLookup

__all__ = ["CatalogueEntry", "CatalogueLookup", "InMemoryCatalogue"]
