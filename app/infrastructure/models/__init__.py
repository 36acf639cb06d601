"""ORM models used by the application infrastructure."""

from .notification_log import NotificationLogModel
from .notification_template import NotificationTemplateModel
from .notification_type import NotificationTypeModel
from .profile import ProfileModel
from .user_notification_preference import UserNotificationPreferenceModel

__all__ = [
    "NotificationLogModel",
    "NotificationTemplateModel",
    "NotificationTypeModel",
    "ProfileModel",
    "UserNotificationPreferenceModel",
]
