"""Exception hierarchy for the shopping cart.

Business-rule outcomes (unknown product, unusable coupon, failed validation)
are never raised; they are absorbed into return values and derived
properties. Misuse of the API raises `protean.exceptions.ValidationError`;
the exceptions below cover failures of the external collaborators the cart
depends on.
"""

from contextlib import contextmanager

from protean.exceptions import ValidationError


class ShopcartError(Exception):
    """Base class for all cart errors."""


class CollaboratorUnavailableError(ShopcartError):
    """An external collaborator failed for a reason other than "not found"."""

    collaborator = "collaborator"

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(f"{self.collaborator}: {message}")


class CatalogueUnavailableError(CollaboratorUnavailableError):
    collaborator = "catalogue"


class PricingUnavailableError(CollaboratorUnavailableError):
    collaborator = "pricing"


class TaxUnavailableError(CollaboratorUnavailableError):
    collaborator = "tax"


class ShippingUnavailableError(CollaboratorUnavailableError):
    collaborator = "shipping"


class PersistenceError(CollaboratorUnavailableError):
    collaborator = "persistence"


class ContactSyncError(CollaboratorUnavailableError):
    collaborator = "contacts"


@contextmanager
def translate_errors(error_cls: type[CollaboratorUnavailableError]):
    """Re-raise unexpected adapter exceptions as `error_cls`.

    Errors that already belong to this hierarchy, and validation errors,
    pass through untouched.
    """
    try:
        yield
    except (ShopcartError, ValidationError):
        raise
    except Exception as exc:
        raise error_cls(str(exc) or exc.__class__.__name__, cause=exc) from exc
