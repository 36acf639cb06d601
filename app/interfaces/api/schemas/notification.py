"""Pydantic models describing the notification API payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

NotificationCategory = Literal["business", "applicant", "admin", "system"]


class DispatchRequestBody(BaseModel):
    """Trigger payload; required-field checks happen in the route to answer 400."""

    model_config = ConfigDict(populate_by_name=True)

    notification_type: str | None = Field(default=None, alias="notificationType")
    recipient_user_id: str | None = Field(default=None, alias="recipientUserId")
    recipient_email: str | None = Field(default=None, alias="recipientEmail")
    context: dict[str, Any] = Field(default_factory=dict)


class DispatchResponse(BaseModel):
    """Successful dispatch outcome."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    skipped: bool | None = None
    reason: str | None = None
    message_id: str | None = Field(default=None, alias="messageId")


class SendEmailRequest(BaseModel):
    """Ad-hoc email outside the template pipeline."""

    model_config = ConfigDict(populate_by_name=True)

    to: str | list[str] | None = None
    subject: str | None = None
    html: str | None = None
    text: str | None = None
    reply_to: str | None = Field(default=None, alias="replyTo")


class SendEmailResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message_id: str | None = Field(default=None, alias="messageId")


class NotificationTypeCreate(BaseModel):
    key: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=150)
    description: str | None = None
    category: NotificationCategory
    default_enabled: bool = True
    is_system: bool = False


class NotificationTypeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=150)
    description: str | None = None
    category: NotificationCategory | None = None
    default_enabled: bool | None = None
    is_system: bool | None = None


class NotificationTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    name: str
    description: str | None = None
    category: str
    default_enabled: bool
    is_system: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationTemplateUpsert(BaseModel):
    """Administrator override of a notification template."""

    subject: str = Field(..., min_length=1, max_length=255)
    body_html: str = Field(..., min_length=1)
    body_text: str | None = None


class NotificationTemplateStatusUpdate(BaseModel):
    is_active: bool


class NotificationTemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    notification_type_id: int
    template_type: str
    subject: str
    body_html: str
    body_text: str | None = None
    variables: list[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    notification_type_key: str
    recipient_email: str
    recipient_user_id: str | None = None
    subject: str
    status: str
    error_message: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None


class NotificationPreferenceUpdate(BaseModel):
    is_enabled: bool
    custom_template_subject: str | None = Field(default=None, max_length=255)
    custom_template_body: str | None = None


class NotificationPreferenceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    notification_type_id: int
    is_enabled: bool
    custom_template_subject: str | None = None
    custom_template_body: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "DispatchRequestBody",
    "DispatchResponse",
    "NotificationCategory",
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
]
