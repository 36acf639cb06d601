"""Lookup of notification types by their stable key."""

from __future__ import annotations

from typing import Protocol

from app.domain.entities import NotificationType
from app.domain.exceptions import NotificationTypeNotFoundError


class NotificationTypeSource(Protocol):
    def get_by_key(self, key: str) -> NotificationType | None:
        ...


class NotificationTypeRegistry:
    """Resolve the symbolic keys used by business triggers.

    An unknown key is a caller bug (typically a typo) and is never retried.
    """

    def __init__(self, types: NotificationTypeSource) -> None:
        self._types = types

    def get_by_key(self, key: str) -> NotificationType:
        notification_type = self._types.get_by_key(key)
        if notification_type is None:
            raise NotificationTypeNotFoundError(key)
        return notification_type


__all__ = ["NotificationTypeRegistry", "NotificationTypeSource"]
