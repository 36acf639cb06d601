"""Domain entities exposed by the application."""

from .dispatch import (
    DISPATCH_STATUS_SENT,
    DISPATCH_STATUS_SKIPPED,
    SKIP_REASON_NO_RECIPIENT,
    SKIP_REASON_PREFERENCE_DISABLED,
    DeliveryReceipt,
    DispatchRequest,
    DispatchResult,
    Recipient,
    RenderedMessage,
)
from .notification_log import (
    LOG_STATUSES,
    LOG_STATUS_FAILED,
    LOG_STATUS_SENT,
    LOG_STATUS_SKIPPED,
    RECIPIENT_EMAIL_MAX_LENGTH,
    RECIPIENT_USER_ID_MAX_LENGTH,
    NotificationLog,
)
from .notification_preference import UserNotificationPreference
from .notification_template import (
    TEMPLATE_TIER_ADMIN_GLOBAL,
    TEMPLATE_TIER_PRIORITY,
    TEMPLATE_TIER_SYSTEM_DEFAULT,
    NotificationTemplate,
)
from .notification_type import (
    CATEGORY_ADMIN,
    CATEGORY_APPLICANT,
    CATEGORY_BUSINESS,
    CATEGORY_SYSTEM,
    NOTIFICATION_CATEGORIES,
    NotificationType,
)
from .profile import Profile

__all__ = [
    "CATEGORY_ADMIN",
    "CATEGORY_APPLICANT",
    "CATEGORY_BUSINESS",
    "CATEGORY_SYSTEM",
    "DISPATCH_STATUS_SENT",
    "DISPATCH_STATUS_SKIPPED",
    "DeliveryReceipt",
    "DispatchRequest",
    "DispatchResult",
    "LOG_STATUSES",
    "LOG_STATUS_FAILED",
    "LOG_STATUS_SENT",
    "LOG_STATUS_SKIPPED",
    "NOTIFICATION_CATEGORIES",
    "NotificationLog",
    "NotificationTemplate",
    "NotificationType",
    "Profile",
    "RECIPIENT_EMAIL_MAX_LENGTH",
    "RECIPIENT_USER_ID_MAX_LENGTH",
    "Recipient",
    "RenderedMessage",
    "SKIP_REASON_NO_RECIPIENT",
    "SKIP_REASON_PREFERENCE_DISABLED",
    "TEMPLATE_TIER_ADMIN_GLOBAL",
    "TEMPLATE_TIER_PRIORITY",
    "TEMPLATE_TIER_SYSTEM_DEFAULT",
    "UserNotificationPreference",
]
