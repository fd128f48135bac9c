"""Contact synchronisation: keeps marketing contacts in step with buyers."""

from shopcart.contacts.fake_adapter import InMemoryContacts
from shopcart.contacts.port import Contact, ContactResolver

__all__ = ["Contact", "ContactResolver", "InMemoryContacts"]
