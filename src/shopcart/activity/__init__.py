"""Shopper activity logging."""

from shopcart.activity.memory_adapter import InMemoryActivityLog
from shopcart.activity.port import Activity, ActivityLog, ActivityType

__all__ = ["Activity", "ActivityLog", "ActivityType", "InMemoryActivityLog"]
