"""Shopper identity attached to a cart: the signed-in user and the customer."""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A signed-in account, as provided by the storefront's identity layer."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str = Field(default="", max_length=254)
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)


class Customer(BaseModel):
    """The buyer of a cart.

    A guest checkout carries a customer without a user; a signed-in shopper
    has a customer derived from, or linked to, their user.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str | None = None
    user_id: str | None = None
    email: str = Field(default="", max_length=254)
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)

    @classmethod
    def from_user(cls, user: User) -> "Customer":
        return cls(
            user_id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )
