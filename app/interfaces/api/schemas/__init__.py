from .events import (
    ApplicationStatusEvent,
    ApplicationSubmittedEvent,
    BusinessRegisteredEvent,
    BusinessStatusEvent,
    EventAccepted,
    JobPostedEvent,
    SubscriberItem,
)
from .notification import (
    DispatchRequestBody,
    DispatchResponse,
    NotificationLogRead,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationTemplateRead,
    NotificationTemplateStatusUpdate,
    NotificationTemplateUpsert,
    NotificationTypeCreate,
    NotificationTypeRead,
    NotificationTypeUpdate,
    SendEmailRequest,
    SendEmailResponse,
)

__all__ = [
    "ApplicationStatusEvent",
    "ApplicationSubmittedEvent",
    "BusinessRegisteredEvent",
    "BusinessStatusEvent",
    "DispatchRequestBody",
    "DispatchResponse",
    "EventAccepted",
    "JobPostedEvent",
    "NotificationLogRead",
    "NotificationPreferenceRead",
    "NotificationPreferenceUpdate",
    "NotificationTemplateRead",
    "NotificationTemplateStatusUpdate",
    "NotificationTemplateUpsert",
    "NotificationTypeCreate",
    "NotificationTypeRead",
    "NotificationTypeUpdate",
    "SendEmailRequest",
    "SendEmailResponse",
    "SubscriberItem",
]
