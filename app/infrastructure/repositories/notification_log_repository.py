"""Persistence layer for notification audit records."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationLog
from app.infrastructure.models import NotificationLogModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class NotificationLogRepository:
    """Append and query :class:`NotificationLog` entries.

    There is intentionally no update or delete: log rows are never mutated by
    the application.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: NotificationLog) -> NotificationLog:
        model = NotificationLogModel(
            notification_type_key=entry.notification_type_key,
            recipient_email=entry.recipient_email,
            recipient_user_id=entry.recipient_user_id,
            subject=entry.subject,
            status=entry.status,
            error_message=entry.error_message,
            metadata_=dict(entry.metadata or {}),
            created_at=ensure_app_naive_datetime(entry.created_at or now_in_app_timezone()),
        )
        self.session.add(model)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    def list(
        self,
        *,
        limit: int | None = 100,
        status: str | None = None,
        notification_type_key: str | None = None,
    ) -> Sequence[NotificationLog]:
        query = self.session.query(NotificationLogModel)
        if status is not None:
            query = query.filter(NotificationLogModel.status == status)
        if notification_type_key is not None:
            query = query.filter(
                NotificationLogModel.notification_type_key == notification_type_key
            )
        query = query.order_by(
            NotificationLogModel.created_at.desc(), NotificationLogModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: NotificationLogModel) -> NotificationLog:
        return NotificationLog(
            id=model.id,
            notification_type_key=model.notification_type_key,
            recipient_email=model.recipient_email,
            recipient_user_id=model.recipient_user_id,
            subject=model.subject,
            status=model.status,
            error_message=model.error_message,
            metadata=dict(model.metadata_ or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationLogRepository"]
