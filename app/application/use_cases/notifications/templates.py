"""Template tier selection and administration."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from sqlalchemy.orm import Session

from app.domain.entities import (
    TEMPLATE_TIER_ADMIN_GLOBAL,
    TEMPLATE_TIER_PRIORITY,
    NotificationTemplate,
    NotificationType,
)
from app.domain.exceptions import NoTemplateError
from app.infrastructure.repositories import (
    NotificationTemplateRepository,
    NotificationTypeRepository,
)

from .rendering import extract_variables


class TemplateSource(Protocol):
    def list_active_for_type(self, notification_type_id: int) -> Sequence[NotificationTemplate]:
        ...


class TemplateSelector:
    """Pick the active template with the highest tier for a notification type.

    ``tiers`` is ordered from highest to lowest precedence; adding a tier only
    requires extending that sequence.
    """

    def __init__(
        self,
        templates: TemplateSource,
        tiers: Sequence[str] = TEMPLATE_TIER_PRIORITY,
    ) -> None:
        self._templates = templates
        self._tiers = tuple(tiers)

    def resolve(self, notification_type: NotificationType) -> NotificationTemplate:
        active = {
            template.template_type: template
            for template in self._templates.list_active_for_type(notification_type.id)
            if template.is_active
        }
        for tier in self._tiers:
            template = active.get(tier)
            if template is not None:
                return template
        raise NoTemplateError(notification_type.key)


def list_notification_templates(
    session: Session, *, notification_type_id: int | None = None
) -> Sequence[NotificationTemplate]:
    """Return stored templates, optionally restricted to one notification type."""

    return NotificationTemplateRepository(session).list(
        notification_type_id=notification_type_id
    )


def upsert_admin_template(
    session: Session,
    *,
    notification_type_id: int,
    subject: str,
    body_html: str,
    body_text: str | None = None,
) -> NotificationTemplate:
    """Store the administrator override for a notification type and activate it."""

    if NotificationTypeRepository(session).get(notification_type_id) is None:
        raise ValueError("Notification type not found")

    template = NotificationTemplate(
        id=None,
        notification_type_id=notification_type_id,
        template_type=TEMPLATE_TIER_ADMIN_GLOBAL,
        subject=subject,
        body_html=body_html,
        body_text=body_text or None,
        variables=extract_variables(subject, body_html, body_text),
        is_active=True,
    )
    return NotificationTemplateRepository(session).upsert(template)


def set_template_active(
    session: Session, template_id: int, *, is_active: bool
) -> NotificationTemplate:
    """Activate or deactivate a template, e.g. to fall back to the system default."""

    template = NotificationTemplateRepository(session).set_active(template_id, is_active)
    if template is None:
        raise ValueError("Notification template not found")
    return template


__all__ = [
    "TemplateSelector",
    "TemplateSource",
    "list_notification_templates",
    "set_template_active",
    "upsert_admin_template",
]
