"""Repository implementations for infrastructure layer."""

from .notification_log_repository import NotificationLogRepository
from .notification_preference_repository import NotificationPreferenceRepository
from .notification_template_repository import NotificationTemplateRepository
from .notification_type_repository import NotificationTypeRepository
from .profile_repository import ProfileRepository

__all__ = [
    "NotificationLogRepository",
    "NotificationPreferenceRepository",
    "NotificationTemplateRepository",
    "NotificationTypeRepository",
    "ProfileRepository",
]
