"""In-memory contact resolver for development and testing."""

from shopcart.cart.customer import User
from shopcart.contacts.port import Contact, ContactResolver
from shopcart.exceptions import ContactSyncError


class InMemoryContacts(ContactResolver):
    """Keeps one contact per user plus a shared anonymous contact.

    `set_current()` pins the contact returned for every shopper, which is
    handy when a test wants to inspect exactly one contact.
    """

    def __init__(self) -> None:
        self.contacts: dict[str | None, Contact] = {}
        self.pinned: Contact | None = None
        self.is_available: bool = True
        self.failure_reason: str = "Contact service unavailable"
        self.updates: list[dict] = []

    def configure(self, is_available: bool, failure_reason: str = "Contact service unavailable") -> None:
        self.is_available = is_available
        self.failure_reason = failure_reason

    def set_current(self, contact: Contact | None) -> None:
        self.pinned = contact

    def current_contact(self, user: User | None) -> Contact | None:
        if not self.is_available:
            raise ContactSyncError(self.failure_reason)
        if self.pinned is not None:
            return self.pinned

        key = user.id if user else None
        if key not in self.contacts:
            self.contacts[key] = Contact(
                first_name=user.first_name if user else "",
                last_name=user.last_name if user else "",
                email=user.email if user else "",
            )
        return self.contacts[key]

    def update_contact(self, contact: Contact, *, first_name: str, email: str) -> Contact:
        if not self.is_available:
            raise ContactSyncError(self.failure_reason)

        contact.first_name = first_name
        contact.email = email
        self.updates.append({"contact_id": contact.id, "first_name": first_name, "email": email})
        return contact
