"""Persistence layer for user notification preferences."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import UserNotificationPreference
from app.infrastructure.models import UserNotificationPreferenceModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class NotificationPreferenceRepository:
    """Provide lookups and upserts for :class:`UserNotificationPreference`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(
        self, user_id: str, notification_type_id: int
    ) -> UserNotificationPreference | None:
        model = self._get_model(user_id, notification_type_id)
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: str) -> Sequence[UserNotificationPreference]:
        query = (
            self.session.query(UserNotificationPreferenceModel)
            .filter(UserNotificationPreferenceModel.user_id == user_id)
            .order_by(UserNotificationPreferenceModel.notification_type_id)
        )
        return [self._to_entity(model) for model in query.all()]

    def upsert(self, preference: UserNotificationPreference) -> UserNotificationPreference:
        model = self._get_model(preference.user_id, preference.notification_type_id)
        if model is None:
            model = UserNotificationPreferenceModel(
                user_id=preference.user_id,
                notification_type_id=preference.notification_type_id,
                created_at=ensure_app_naive_datetime(
                    preference.created_at or now_in_app_timezone()
                ),
            )
        self._apply_entity_to_model(model, preference)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            # A concurrent first toggle inserted the row; the last write wins.
            self.session.rollback()
            model = self._get_model(preference.user_id, preference.notification_type_id)
            if model is None:
                raise
            self._apply_entity_to_model(model, preference)
            self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(
        model: UserNotificationPreferenceModel, preference: UserNotificationPreference
    ) -> None:
        model.is_enabled = preference.is_enabled
        model.custom_template_subject = preference.custom_template_subject
        model.custom_template_body = preference.custom_template_body

    def _get_model(
        self, user_id: str, notification_type_id: int
    ) -> UserNotificationPreferenceModel | None:
        return (
            self.session.query(UserNotificationPreferenceModel)
            .filter(UserNotificationPreferenceModel.user_id == user_id)
            .filter(
                UserNotificationPreferenceModel.notification_type_id == notification_type_id
            )
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: UserNotificationPreferenceModel) -> UserNotificationPreference:
        return UserNotificationPreference(
            id=model.id,
            user_id=model.user_id,
            notification_type_id=model.notification_type_id,
            is_enabled=bool(model.is_enabled),
            custom_template_subject=model.custom_template_subject,
            custom_template_body=model.custom_template_body,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationPreferenceRepository"]
