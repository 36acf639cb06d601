"""Domain entity representing one audited dispatch attempt."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final

LOG_STATUS_SENT: Final[str] = "sent"
LOG_STATUS_FAILED: Final[str] = "failed"
LOG_STATUS_SKIPPED: Final[str] = "skipped"

RECIPIENT_EMAIL_MAX_LENGTH: Final[int] = 320
RECIPIENT_USER_ID_MAX_LENGTH: Final[int] = 255

LOG_STATUSES: Final[tuple[str, ...]] = (
    LOG_STATUS_SENT,
    LOG_STATUS_FAILED,
    LOG_STATUS_SKIPPED,
)


@dataclass
class NotificationLog:
    """Append-only record of a dispatch outcome."""

    id: int | None
    notification_type_key: str
    recipient_email: str
    subject: str
    status: str
    recipient_user_id: str | None = None
    error_message: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


__all__ = [
    "LOG_STATUSES",
    "LOG_STATUS_FAILED",
    "LOG_STATUS_SENT",
    "LOG_STATUS_SKIPPED",
    "NotificationLog",
    "RECIPIENT_EMAIL_MAX_LENGTH",
    "RECIPIENT_USER_ID_MAX_LENGTH",
]
