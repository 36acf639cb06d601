"""Per-user notification preferences."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy.orm import Session

from app.domain.entities import NotificationType, UserNotificationPreference
from app.domain.exceptions import InvalidPreferenceError
from app.infrastructure.repositories import (
    NotificationPreferenceRepository,
    NotificationTypeRepository,
)

logger = logging.getLogger(__name__)


class PreferenceSource(Protocol):
    def get(
        self, user_id: str, notification_type_id: int
    ) -> UserNotificationPreference | None:
        ...


class PreferenceResolver:
    """Decide whether a notification type is enabled for a user."""

    def __init__(self, preferences: PreferenceSource) -> None:
        self._preferences = preferences

    def is_enabled(self, user_id: str, notification_type: NotificationType) -> bool:
        # System types cannot be opted out of, so stored rows are not consulted.
        if notification_type.is_system:
            return True

        preference = self._preferences.get(user_id, notification_type.id)
        if preference is not None:
            return preference.is_enabled
        return notification_type.default_enabled


def list_user_preferences(
    session: Session, user_id: str
) -> Sequence[UserNotificationPreference]:
    """Return the preferences explicitly stored by ``user_id``."""

    return NotificationPreferenceRepository(session).list_for_user(user_id)


def set_user_preference(
    session: Session,
    *,
    user_id: str,
    notification_type_id: int,
    is_enabled: bool,
    custom_template_subject: str | None = None,
    custom_template_body: str | None = None,
) -> UserNotificationPreference:
    """Create or update the preference of ``user_id`` for a notification type."""

    notification_type = NotificationTypeRepository(session).get(notification_type_id)
    if notification_type is None:
        raise ValueError("Notification type not found")
    if notification_type.is_system and not is_enabled:
        raise InvalidPreferenceError(
            f"System notification '{notification_type.key}' cannot be disabled"
        )

    saved = NotificationPreferenceRepository(session).upsert(
        UserNotificationPreference(
            id=None,
            user_id=user_id,
            notification_type_id=notification_type_id,
            is_enabled=is_enabled,
            custom_template_subject=custom_template_subject,
            custom_template_body=custom_template_body,
        )
    )
    logger.info(
        "User %s %s notification type %s",
        user_id,
        "enabled" if is_enabled else "disabled",
        notification_type.key,
    )
    return saved


__all__ = [
    "PreferenceResolver",
    "PreferenceSource",
    "list_user_preferences",
    "set_user_preference",
]
