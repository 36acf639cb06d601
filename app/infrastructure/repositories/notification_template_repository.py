"""Persistence layer for notification templates."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationTemplate
from app.infrastructure.models import NotificationTemplateModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class NotificationTemplateRepository:
    """Provide CRUD helpers for :class:`NotificationTemplate` entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, template_id: int) -> NotificationTemplate | None:
        model = self.session.get(NotificationTemplateModel, template_id)
        return self._to_entity(model) if model else None

    def get_by_tier(
        self, notification_type_id: int, template_type: str
    ) -> NotificationTemplate | None:
        model = self._get_model_by_tier(notification_type_id, template_type)
        return self._to_entity(model) if model else None

    def list_active_for_type(self, notification_type_id: int) -> Sequence[NotificationTemplate]:
        """Return the active templates of a type, one per tier at most."""

        query = (
            self.session.query(NotificationTemplateModel)
            .filter(NotificationTemplateModel.notification_type_id == notification_type_id)
            .filter(NotificationTemplateModel.is_active.is_(True))
            .order_by(NotificationTemplateModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list(self, *, notification_type_id: int | None = None) -> Sequence[NotificationTemplate]:
        query = self.session.query(NotificationTemplateModel)
        if notification_type_id is not None:
            query = query.filter(
                NotificationTemplateModel.notification_type_id == notification_type_id
            )
        query = query.order_by(
            NotificationTemplateModel.notification_type_id,
            NotificationTemplateModel.template_type,
        )
        return [self._to_entity(model) for model in query.all()]

    def upsert(self, template: NotificationTemplate) -> NotificationTemplate:
        """Insert ``template`` or replace the row stored for the same type and tier."""

        model = self._get_model_by_tier(template.notification_type_id, template.template_type)
        if model is None:
            model = NotificationTemplateModel()
            model.created_at = ensure_app_naive_datetime(
                template.created_at or now_in_app_timezone()
            )
        self._apply_entity_to_model(model, template)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_active(self, template_id: int, is_active: bool) -> NotificationTemplate | None:
        model = self.session.get(NotificationTemplateModel, template_id)
        if model is None:
            return None
        model.is_active = is_active
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model_by_tier(
        self, notification_type_id: int, template_type: str
    ) -> NotificationTemplateModel | None:
        return (
            self.session.query(NotificationTemplateModel)
            .filter(NotificationTemplateModel.notification_type_id == notification_type_id)
            .filter(NotificationTemplateModel.template_type == template_type)
            .one_or_none()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationTemplateModel, template: NotificationTemplate
    ) -> None:
        model.notification_type_id = template.notification_type_id
        model.template_type = template.template_type
        model.subject = template.subject
        model.body_html = template.body_html
        model.body_text = template.body_text
        model.variables = list(template.variables)
        model.is_active = template.is_active

    @staticmethod
    def _to_entity(model: NotificationTemplateModel) -> NotificationTemplate:
        return NotificationTemplate(
            id=model.id,
            notification_type_id=model.notification_type_id,
            template_type=model.template_type,
            subject=model.subject,
            body_html=model.body_html,
            body_text=model.body_text,
            variables=list(model.variables) if model.variables is not None else [],
            is_active=bool(model.is_active),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationTemplateRepository"]
