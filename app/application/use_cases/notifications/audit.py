"""Audit trail of dispatch attempts."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from sqlalchemy.orm import Session

from app.domain.entities import (
    LOG_STATUSES,
    RECIPIENT_EMAIL_MAX_LENGTH,
    RECIPIENT_USER_ID_MAX_LENGTH,
    NotificationLog,
)
from app.infrastructure.repositories import NotificationLogRepository
from app.utils import now_in_app_timezone

from .rendering import stringify_context

logger = logging.getLogger(__name__)

UNKNOWN_RECIPIENT = "unknown"


class LogSink(Protocol):
    def create(self, entry: NotificationLog) -> NotificationLog:
        ...


class AuditLogger:
    """Append one :class:`NotificationLog` row per dispatch attempt.

    Metadata values are stored as the text the renderer would substitute, so any
    context accepted by a dispatch can be written to the JSON column.
    """

    def __init__(self, logs: LogSink) -> None:
        self._logs = logs

    def record(
        self,
        *,
        notification_type_key: str,
        status: str,
        recipient_email: str | None,
        subject: str,
        recipient_user_id: str | None = None,
        error_message: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> NotificationLog:
        if status not in LOG_STATUSES:
            raise ValueError(f"Unsupported notification log status: {status}")
        entry = NotificationLog(
            id=None,
            notification_type_key=notification_type_key,
            recipient_email=(recipient_email or UNKNOWN_RECIPIENT)[:RECIPIENT_EMAIL_MAX_LENGTH],
            recipient_user_id=(
                recipient_user_id[:RECIPIENT_USER_ID_MAX_LENGTH] if recipient_user_id else None
            ),
            subject=subject,
            status=status,
            error_message=error_message,
            metadata=stringify_context(metadata or {}),
            created_at=now_in_app_timezone(),
        )
        return self._logs.create(entry)

    def record_safely(self, **fields: Any) -> NotificationLog | None:
        """Like :meth:`record` but never raises; failures are only warned about."""

        try:
            return self.record(**fields)
        except Exception as exc:
            logger.warning(
                "Failed to write notification log for %s (%s): %s",
                fields.get("notification_type_key"),
                fields.get("status"),
                exc,
            )
            return None


def list_notification_logs(
    session: Session,
    *,
    limit: int = 100,
    status: str | None = None,
    notification_type_key: str | None = None,
) -> Sequence[NotificationLog]:
    """Return the most recent log entries first."""

    return NotificationLogRepository(session).list(
        limit=limit, status=status, notification_type_key=notification_type_key
    )


__all__ = [
    "AuditLogger",
    "LogSink",
    "UNKNOWN_RECIPIENT",
    "list_notification_logs",
]
