"""Persistence layer for the notification type catalog."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationType
from app.infrastructure.models import NotificationTypeModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class NotificationTypeRepository:
    """Provide CRUD operations for :class:`NotificationType` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, type_id: int) -> NotificationType | None:
        model = self.session.get(NotificationTypeModel, type_id)
        return self._to_entity(model) if model else None

    def get_by_key(self, key: str) -> NotificationType | None:
        model = (
            self.session.query(NotificationTypeModel)
            .filter(NotificationTypeModel.key == key)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def list(self, *, category: str | None = None) -> Sequence[NotificationType]:
        query = self.session.query(NotificationTypeModel)
        if category is not None:
            query = query.filter(NotificationTypeModel.category == category)
        query = query.order_by(NotificationTypeModel.category, NotificationTypeModel.name)
        return [self._to_entity(model) for model in query.all()]

    def create(self, notification_type: NotificationType) -> NotificationType:
        model = NotificationTypeModel()
        self._apply_entity_to_model(model, notification_type)
        model.created_at = ensure_app_naive_datetime(
            notification_type.created_at or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, notification_type: NotificationType) -> NotificationType:
        if notification_type.id is None:
            raise ValueError("Notification type id is required for updates")
        model = self.session.get(NotificationTypeModel, notification_type.id)
        if model is None:
            raise ValueError(f"Notification type with id {notification_type.id} not found")
        self._apply_entity_to_model(model, notification_type)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationTypeModel, notification_type: NotificationType
    ) -> None:
        model.key = notification_type.key
        model.name = notification_type.name
        model.description = notification_type.description
        model.category = notification_type.category
        model.default_enabled = notification_type.default_enabled
        model.is_system = notification_type.is_system

    @staticmethod
    def _to_entity(model: NotificationTypeModel) -> NotificationType:
        return NotificationType(
            id=model.id,
            key=model.key,
            name=model.name,
            description=model.description,
            category=model.category,
            default_enabled=bool(model.default_enabled),
            is_system=bool(model.is_system),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationTypeRepository"]
