"""Routes for the user notification preference toggles."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    list_user_preferences as list_user_preferences_uc,
    set_user_preference as set_user_preference_uc,
)
from app.domain.exceptions import InvalidPreferenceError
from app.infrastructure.database import get_db
from app.interfaces.api.schemas import (
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
)

router = APIRouter(prefix="/users/{user_id}/notification-preferences", tags=["preferences"])


@router.get("", response_model=list[NotificationPreferenceRead])
def list_preferences(
    user_id: str, db: Session = Depends(get_db)
) -> list[NotificationPreferenceRead]:
    """Return the preferences the user has explicitly set.

    Types without a row follow their ``default_enabled`` flag.
    """

    return [
        NotificationPreferenceRead.model_validate(preference)
        for preference in list_user_preferences_uc(db, user_id)
    ]


@router.put("/{type_id}", response_model=NotificationPreferenceRead)
def set_preference(
    user_id: str,
    type_id: int,
    payload: NotificationPreferenceUpdate,
    db: Session = Depends(get_db),
) -> NotificationPreferenceRead:
    """Enable or disable one notification type for the user."""

    try:
        preference = set_user_preference_uc(
            db,
            user_id=user_id,
            notification_type_id=type_id,
            is_enabled=payload.is_enabled,
            custom_template_subject=payload.custom_template_subject,
            custom_template_body=payload.custom_template_body,
        )
    except InvalidPreferenceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return NotificationPreferenceRead.model_validate(preference)


__all__ = ["router"]
