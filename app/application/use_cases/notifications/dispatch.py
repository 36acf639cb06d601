"""Dispatch pipeline: type, recipient, preference, template, render, deliver, log."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from sqlalchemy.orm import Session

from app.domain.entities import (
    DISPATCH_STATUS_SENT,
    DISPATCH_STATUS_SKIPPED,
    LOG_STATUS_FAILED,
    LOG_STATUS_SENT,
    LOG_STATUS_SKIPPED,
    SKIP_REASON_NO_RECIPIENT,
    SKIP_REASON_PREFERENCE_DISABLED,
    DispatchResult,
    Profile,
    Recipient,
)
from app.domain.exceptions import (
    DeliveryError,
    NoTemplateError,
    RecipientUnresolvableError,
)
from app.infrastructure.email import DeliveryGateway
from app.infrastructure.repositories import (
    NotificationLogRepository,
    NotificationPreferenceRepository,
    NotificationTemplateRepository,
    NotificationTypeRepository,
    ProfileRepository,
)

from .audit import AuditLogger
from .preferences import PreferenceResolver
from .registry import NotificationTypeRegistry
from .rendering import TemplateRenderer
from .templates import TemplateSelector

logger = logging.getLogger(__name__)

PLACEHOLDER_SUBJECT = "N/A"
GENERIC_EMAIL_KEY = "generic_email"


class ProfileSource(Protocol):
    def get(self, user_id: str) -> Profile | None:
        ...


class DispatchOrchestrator:
    """Run a single notification dispatch.

    Every outcome writes exactly one log row, except an unknown type key: there
    is no valid type to log against, so that error reaches the caller alone.
    Nothing is retried; a failed delivery is logged and re-raised.
    """

    def __init__(
        self,
        *,
        registry: NotificationTypeRegistry,
        profiles: ProfileSource,
        resolver: PreferenceResolver,
        selector: TemplateSelector,
        renderer: TemplateRenderer,
        gateway: DeliveryGateway,
        audit: AuditLogger,
    ) -> None:
        self.registry = registry
        self.profiles = profiles
        self.resolver = resolver
        self.selector = selector
        self.renderer = renderer
        self.gateway = gateway
        self.audit = audit

    def dispatch(
        self,
        notification_type_key: str,
        recipient: Recipient,
        context: Mapping[str, Any] | None = None,
    ) -> DispatchResult:
        context = dict(context or {})
        notification_type = self.registry.get_by_key(notification_type_key)

        email = self._resolve_email(recipient)
        if not email:
            logger.info(
                "Skipping %s: no recipient email for user %s",
                notification_type_key,
                recipient.user_id,
            )
            self.audit.record_safely(
                notification_type_key=notification_type_key,
                status=LOG_STATUS_SKIPPED,
                recipient_email=None,
                recipient_user_id=recipient.user_id,
                subject=PLACEHOLDER_SUBJECT,
                metadata={"reason": SKIP_REASON_NO_RECIPIENT},
            )
            raise RecipientUnresolvableError(recipient.user_id)

        if recipient.user_id and not self.resolver.is_enabled(
            recipient.user_id, notification_type
        ):
            logger.info(
                "Notification %s disabled by preference of user %s",
                notification_type_key,
                recipient.user_id,
            )
            entry = self.audit.record_safely(
                notification_type_key=notification_type_key,
                status=LOG_STATUS_SKIPPED,
                recipient_email=email,
                recipient_user_id=recipient.user_id,
                subject=PLACEHOLDER_SUBJECT,
                metadata={"reason": SKIP_REASON_PREFERENCE_DISABLED},
            )
            return DispatchResult(
                status=DISPATCH_STATUS_SKIPPED,
                reason=SKIP_REASON_PREFERENCE_DISABLED,
                log_id=entry.id if entry else None,
            )

        try:
            template = self.selector.resolve(notification_type)
        except NoTemplateError as exc:
            logger.error("No active template for notification type %s", notification_type_key)
            self.audit.record_safely(
                notification_type_key=notification_type_key,
                status=LOG_STATUS_FAILED,
                recipient_email=email,
                recipient_user_id=recipient.user_id,
                subject=PLACEHOLDER_SUBJECT,
                error_message=str(exc),
                metadata=context,
            )
            raise

        message = self.renderer.render(template, context)

        try:
            receipt = self.gateway.send(
                email, message.subject, message.body_html, message.body_text
            )
        except DeliveryError as exc:
            logger.error(
                "Delivery of %s to %s failed: %s", notification_type_key, email, exc.message
            )
            self.audit.record_safely(
                notification_type_key=notification_type_key,
                status=LOG_STATUS_FAILED,
                recipient_email=email,
                recipient_user_id=recipient.user_id,
                subject=message.subject,
                error_message=exc.message,
                metadata={**context, "template_type": template.template_type},
            )
            raise

        entry = self.audit.record_safely(
            notification_type_key=notification_type_key,
            status=LOG_STATUS_SENT,
            recipient_email=email,
            recipient_user_id=recipient.user_id,
            subject=message.subject,
            metadata={
                **context,
                "template_type": template.template_type,
                "message_id": receipt.message_id,
            },
        )
        logger.info(
            "Notification %s sent to %s (message id %s)",
            notification_type_key,
            email,
            receipt.message_id,
        )
        return DispatchResult(
            status=DISPATCH_STATUS_SENT,
            message_id=receipt.message_id,
            log_id=entry.id if entry else None,
        )

    def _resolve_email(self, recipient: Recipient) -> str | None:
        if recipient.email and recipient.email.strip():
            return recipient.email.strip()
        if not recipient.user_id:
            return None
        profile = self.profiles.get(recipient.user_id)
        if profile is None or not profile.email:
            return None
        return profile.email


def build_orchestrator(session: Session, gateway: DeliveryGateway) -> DispatchOrchestrator:
    """Wire the SQL-backed components around ``gateway``."""

    return DispatchOrchestrator(
        registry=NotificationTypeRegistry(NotificationTypeRepository(session)),
        profiles=ProfileRepository(session),
        resolver=PreferenceResolver(NotificationPreferenceRepository(session)),
        selector=TemplateSelector(NotificationTemplateRepository(session)),
        renderer=TemplateRenderer(),
        gateway=gateway,
        audit=AuditLogger(NotificationLogRepository(session)),
    )


def dispatch_notification(
    session: Session,
    gateway: DeliveryGateway,
    *,
    notification_type_key: str,
    recipient: Recipient,
    context: Mapping[str, Any] | None = None,
) -> DispatchResult:
    """Run one dispatch against the database bound to ``session``."""

    return build_orchestrator(session, gateway).dispatch(
        notification_type_key, recipient, context
    )


def send_generic_email(
    session: Session,
    gateway: DeliveryGateway,
    *,
    to: str | Sequence[str],
    subject: str,
    html: str,
    text: str | None = None,
    reply_to: str | None = None,
) -> DispatchResult:
    """Send an ad-hoc email outside the template pipeline and audit it."""

    recipients = [to] if isinstance(to, str) else list(to)
    first_recipient = recipients[0] if recipients else None
    audit = AuditLogger(NotificationLogRepository(session))

    try:
        receipt = gateway.send(to, subject, html, text, reply_to)
    except DeliveryError as exc:
        audit.record_safely(
            notification_type_key=GENERIC_EMAIL_KEY,
            status=LOG_STATUS_FAILED,
            recipient_email=first_recipient,
            subject=subject,
            error_message=exc.message,
        )
        raise

    entry = audit.record_safely(
        notification_type_key=GENERIC_EMAIL_KEY,
        status=LOG_STATUS_SENT,
        recipient_email=first_recipient,
        subject=subject,
        metadata={"message_id": receipt.message_id},
    )
    return DispatchResult(
        status=DISPATCH_STATUS_SENT,
        message_id=receipt.message_id,
        log_id=entry.id if entry else None,
    )


__all__ = [
    "DispatchOrchestrator",
    "GENERIC_EMAIL_KEY",
    "PLACEHOLDER_SUBJECT",
    "ProfileSource",
    "build_orchestrator",
    "dispatch_notification",
    "send_generic_email",
]
