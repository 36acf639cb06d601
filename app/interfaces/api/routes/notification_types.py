"""Routes for administering notification types."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    create_notification_type as create_notification_type_uc,
    get_notification_type as get_notification_type_uc,
    list_notification_types as list_notification_types_uc,
    update_notification_type as update_notification_type_uc,
)
from app.domain.entities import NotificationType
from app.domain.exceptions import NotificationTypeNotFoundError
from app.infrastructure.database import get_db
from app.interfaces.api.schemas import (
    NotificationTypeCreate,
    NotificationTypeRead,
    NotificationTypeUpdate,
)

router = APIRouter(prefix="/notification-types", tags=["notification_types"])


def _to_read_model(notification_type: NotificationType) -> NotificationTypeRead:
    return NotificationTypeRead.model_validate(notification_type)


@router.get("/", response_model=list[NotificationTypeRead])
def list_notification_types(
    category: str | None = None,
    db: Session = Depends(get_db),
) -> list[NotificationTypeRead]:
    """Return notification types, optionally filtered by category."""

    try:
        types = list_notification_types_uc(db, category=category)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [_to_read_model(item) for item in types]


@router.post("/", response_model=NotificationTypeRead, status_code=status.HTTP_201_CREATED)
def create_notification_type(
    payload: NotificationTypeCreate,
    db: Session = Depends(get_db),
) -> NotificationTypeRead:
    """Register a new notification type."""

    try:
        created = create_notification_type_uc(db, **payload.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return _to_read_model(created)


@router.get("/{key}", response_model=NotificationTypeRead)
def read_notification_type(key: str, db: Session = Depends(get_db)) -> NotificationTypeRead:
    """Return the notification type registered under ``key``."""

    try:
        return _to_read_model(get_notification_type_uc(db, key))
    except NotificationTypeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.put("/{type_id}", response_model=NotificationTypeRead)
def update_notification_type(
    type_id: int,
    payload: NotificationTypeUpdate,
    db: Session = Depends(get_db),
) -> NotificationTypeRead:
    """Update the editable attributes of a notification type."""

    try:
        updated = update_notification_type_uc(
            db, type_id, **payload.model_dump(exclude_unset=True)
        )
    except NotificationTypeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(updated)


__all__ = ["router"]
