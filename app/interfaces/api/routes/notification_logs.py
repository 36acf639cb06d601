"""Routes for inspecting the notification audit log."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    list_notification_logs as list_notification_logs_uc,
)
from app.infrastructure.database import get_db
from app.interfaces.api.schemas import NotificationLogRead

router = APIRouter(prefix="/notification-logs", tags=["notification_logs"])


@router.get("/", response_model=list[NotificationLogRead])
def list_notification_logs(
    limit: int = Query(100, ge=1, le=1000),
    status: str | None = Query(None, pattern="^(sent|failed|skipped)$"),
    notification_type_key: str | None = None,
    db: Session = Depends(get_db),
) -> list[NotificationLogRead]:
    """Return the most recent dispatch attempts first."""

    entries = list_notification_logs_uc(
        db, limit=limit, status=status, notification_type_key=notification_type_key
    )
    return [NotificationLogRead.model_validate(entry) for entry in entries]


__all__ = ["router"]
