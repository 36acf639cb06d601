"""Routes for administering notification templates."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    list_notification_templates as list_notification_templates_uc,
    set_template_active as set_template_active_uc,
    upsert_admin_template as upsert_admin_template_uc,
)
from app.domain.entities import NotificationTemplate
from app.infrastructure.database import get_db
from app.interfaces.api.schemas import (
    NotificationTemplateRead,
    NotificationTemplateStatusUpdate,
    NotificationTemplateUpsert,
)

router = APIRouter(prefix="/notification-templates", tags=["notification_templates"])


def _to_read_model(template: NotificationTemplate) -> NotificationTemplateRead:
    return NotificationTemplateRead.model_validate(template)


@router.get("/", response_model=list[NotificationTemplateRead])
def list_notification_templates(
    notification_type_id: int | None = None,
    db: Session = Depends(get_db),
) -> list[NotificationTemplateRead]:
    """Return every template tier stored, optionally for one notification type."""

    templates = list_notification_templates_uc(db, notification_type_id=notification_type_id)
    return [_to_read_model(template) for template in templates]


@router.put("/{type_id}/admin-global", response_model=NotificationTemplateRead)
def upsert_admin_template(
    type_id: int,
    payload: NotificationTemplateUpsert,
    db: Session = Depends(get_db),
) -> NotificationTemplateRead:
    """Save the administrator template that overrides the system default."""

    try:
        template = upsert_admin_template_uc(
            db,
            notification_type_id=type_id,
            subject=payload.subject,
            body_html=payload.body_html,
            body_text=payload.body_text,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _to_read_model(template)


@router.patch("/{template_id}/status", response_model=NotificationTemplateRead)
def update_template_status(
    template_id: int,
    payload: NotificationTemplateStatusUpdate,
    db: Session = Depends(get_db),
) -> NotificationTemplateRead:
    """Activate or deactivate a template."""

    try:
        template = set_template_active_uc(db, template_id, is_active=payload.is_active)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _to_read_model(template)


__all__ = ["router"]
