"""In-memory activity log for development and testing."""


from shopcart.activity.port import Activity, ActivityLog, ActivityType
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class InMemoryActivityLog(ActivityLog):
    def __init__(self) -> None:
        self.logged_activities: list[Activity] = []

    def log(self, activity: Activity) -> None:
        self.logged_activities.append(activity)
        logger.debug(
            "Activity logged",
            activity_type=activity.activity_type.value,
            item_id=activity.item_id,
            value=activity.value,
        )

    def of_type(self, activity_type: ActivityType) -> list[Activity]:
        return [a for a in self.logged_activities if a.activity_type == activity_type]
