"""Activity log port (abstract interface).

Shopper activities (such as putting a product in the cart) feed on-line
marketing. The cart reports them through this port and never waits on or
inspects what happens to them afterwards.
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ActivityType(Enum):
    PRODUCT_ADDED_TO_CART = "product_added_to_shoppingcart"
    PRODUCT_REMOVED_FROM_CART = "product_removed_from_shoppingcart"


class Activity(BaseModel):
    model_config = ConfigDict(frozen=True)

    activity_type: ActivityType
    item_id: str
    title: str = ""
    value: str = ""
    cart_id: str | None = None
    user_id: str | None = None
    logged_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ActivityLog(ABC):
    @abstractmethod
    def log(self, activity: Activity) -> None:
        """Record an activity."""
        ...
