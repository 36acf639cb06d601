"""Administration of the notification type catalog."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NOTIFICATION_CATEGORIES, NotificationType
from app.domain.exceptions import NotificationTypeNotFoundError
from app.infrastructure.repositories import NotificationTypeRepository

from .registry import NotificationTypeRegistry


def _ensure_category(category: str) -> None:
    if category not in NOTIFICATION_CATEGORIES:
        allowed = ", ".join(NOTIFICATION_CATEGORIES)
        raise ValueError(f"Unsupported category '{category}'. Allowed: {allowed}")


def list_notification_types(
    session: Session, *, category: str | None = None
) -> Sequence[NotificationType]:
    """Return notification types ordered by category and name."""

    if category is not None:
        _ensure_category(category)
    return NotificationTypeRepository(session).list(category=category)


def get_notification_type(session: Session, key: str) -> NotificationType:
    """Return the notification type registered under ``key``."""

    return NotificationTypeRegistry(NotificationTypeRepository(session)).get_by_key(key)


def create_notification_type(
    session: Session,
    *,
    key: str,
    name: str,
    category: str,
    description: str | None = None,
    default_enabled: bool = True,
    is_system: bool = False,
) -> NotificationType:
    """Register a new notification type."""

    _ensure_category(category)
    normalized_key = key.strip()
    if not normalized_key:
        raise ValueError("Notification type key is required")

    repository = NotificationTypeRepository(session)
    if repository.get_by_key(normalized_key) is not None:
        raise ValueError(f"Notification type '{normalized_key}' already exists")

    return repository.create(
        NotificationType(
            id=None,
            key=normalized_key,
            name=name.strip(),
            description=description,
            category=category,
            default_enabled=default_enabled,
            is_system=is_system,
        )
    )


def update_notification_type(
    session: Session,
    type_id: int,
    *,
    name: str | None = None,
    description: str | None = None,
    category: str | None = None,
    default_enabled: bool | None = None,
    is_system: bool | None = None,
) -> NotificationType:
    """Update the editable fields of a notification type. The key never changes."""

    repository = NotificationTypeRepository(session)
    current = repository.get(type_id)
    if current is None:
        raise NotificationTypeNotFoundError(str(type_id))

    if category is not None:
        _ensure_category(category)
        current.category = category
    if name is not None:
        current.name = name.strip()
    if description is not None:
        current.description = description
    if default_enabled is not None:
        current.default_enabled = default_enabled
    if is_system is not None:
        current.is_system = is_system
    return repository.update(current)


__all__ = [
    "create_notification_type",
    "get_notification_type",
    "list_notification_types",
    "update_notification_type",
]
