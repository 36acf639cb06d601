"""Domain entity representing a user's opt-in/opt-out choice."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class UserNotificationPreference:
    """Explicit preference stored after a user toggles a notification type."""

    id: int | None
    user_id: str
    notification_type_id: int
    is_enabled: bool
    custom_template_subject: str | None = None
    custom_template_body: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["UserNotificationPreference"]
