"""In-memory catalogue for development and testing.

Entries are registered up front and may be changed at runtime (disable a
product, lower its stock) to exercise validation against live catalogue
state. The adapter can also be switched to an "unavailable" mode in which
every lookup fails the way a remote catalogue outage would.
"""

from shopcart.catalogue.port import CatalogueEntry, CatalogueLookup
from shopcart.exceptions import CatalogueUnavailableError


class InMemoryCatalogue(CatalogueLookup):
    """Configurable in-memory catalogue."""

    def __init__(self, entries: list[CatalogueEntry] | None = None) -> None:
        self._entries: dict[str, CatalogueEntry] = {}
        self.is_available: bool = True
        self.failure_reason: str = "Catalogue service unavailable"
        self.calls: list[str] = []

        for entry in entries or []:
            self.add(entry)

    def configure(self, is_available: bool, failure_reason: str = "Catalogue service unavailable") -> None:
        """Configure availability at runtime."""
        self.is_available = is_available
        self.failure_reason = failure_reason

    def add(self, entry: CatalogueEntry) -> CatalogueEntry:
        self._entries[str(entry.product_id)] = entry
        return entry

    def update(self, product_id: str, **changes) -> CatalogueEntry:
        """Replace an entry with a copy carrying `changes`."""
        entry = self._entries[str(product_id)].model_copy(update=changes)
        self._entries[str(product_id)] = entry
        return entry

    def remove(self, product_id: str) -> None:
        self._entries.pop(str(product_id), None)

    def resolve(self, product_id: str) -> CatalogueEntry | None:
        self.calls.append(str(product_id))

        if not self.is_available:
            raise CatalogueUnavailableError(self.failure_reason)

        return self._entries.get(str(product_id))
