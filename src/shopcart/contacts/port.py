"""Contact resolver port (abstract interface).

Marketing contacts are owned elsewhere. On save, the cart resolves the
contact tracking the current shopper and pushes the customer's first name
and email to it. The port deliberately offers no way to change any other
contact field.
"""

from abc import ABC, abstractmethod
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from shopcart.cart.customer import User


class Contact(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    first_name: str = ""
    last_name: str = ""
    email: str = ""


class ContactResolver(ABC):
    """Abstract contact management interface."""

    @abstractmethod
    def current_contact(self, user: User | None) -> Contact | None:
        """Return the contact tracking `user` (or the anonymous visitor)."""
        ...

    @abstractmethod
    def update_contact(self, contact: Contact, *, first_name: str, email: str) -> Contact:
        """Set the contact's first name and email and store it."""
        ...
