"""Shared fixtures for the notification service tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Configure an in-memory database and no email provider before ``app`` is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["SITE_URL"] = "https://jobs.example.com"
os.environ["ADMIN_NOTIFICATION_EMAIL"] = "admin@jobs.example.com"
for _name in (
    "MAILGUN_API_KEY",
    "MAILGUN_DOMAIN",
    "MAILGUN_FROM_EMAIL",
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "EMAIL_PROVIDER",
):
    os.environ.pop(_name, None)

from app.domain.entities import (  # noqa: E402
    TEMPLATE_TIER_SYSTEM_DEFAULT,
    DeliveryReceipt,
    NotificationLog,
    NotificationTemplate,
    NotificationType,
    Profile,
    UserNotificationPreference,
)
from app.domain.exceptions import DeliveryError  # noqa: E402


class RecordingGateway:
    """Delivery gateway double that records messages instead of sending them."""

    def __init__(self, *, error: DeliveryError | None = None, message_id: str = "<msg-1@mg>"):
        self.error = error
        self.message_id = message_id
        self.sent: list[dict] = []

    def send(self, to, subject, body_html, body_text=None, reply_to=None):
        if self.error is not None:
            raise self.error
        self.sent.append(
            {
                "to": to,
                "subject": subject,
                "body_html": body_html,
                "body_text": body_text,
                "reply_to": reply_to,
            }
        )
        return DeliveryReceipt(message_id=self.message_id)


class InMemoryTypes:
    def __init__(self, *types: NotificationType) -> None:
        self.by_key = {item.key: item for item in types}

    def get_by_key(self, key):
        return self.by_key.get(key)


class InMemoryPreferences:
    def __init__(self, *preferences: UserNotificationPreference) -> None:
        self.rows = {(item.user_id, item.notification_type_id): item for item in preferences}
        self.lookups: list[tuple[str, int]] = []

    def get(self, user_id, notification_type_id):
        self.lookups.append((user_id, notification_type_id))
        return self.rows.get((user_id, notification_type_id))


class InMemoryTemplates:
    def __init__(self, *templates: NotificationTemplate) -> None:
        self.templates = list(templates)

    def list_active_for_type(self, notification_type_id):
        return [
            template
            for template in self.templates
            if template.notification_type_id == notification_type_id and template.is_active
        ]


class InMemoryProfiles:
    def __init__(self, *profiles: Profile) -> None:
        self.by_id = {item.id: item for item in profiles}

    def get(self, user_id):
        return self.by_id.get(user_id)


class InMemoryLogs:
    def __init__(self, *, fail: bool = False) -> None:
        self.entries: list[NotificationLog] = []
        self.fail = fail

    def create(self, entry):
        if self.fail:
            raise RuntimeError("log table unavailable")
        entry.id = len(self.entries) + 1
        self.entries.append(entry)
        return entry


def make_type(
    key: str = "business_approved",
    *,
    type_id: int = 1,
    default_enabled: bool = True,
    is_system: bool = False,
    category: str = "business",
) -> NotificationType:
    return NotificationType(
        id=type_id,
        key=key,
        name=key.replace("_", " ").title(),
        description=None,
        category=category,
        default_enabled=default_enabled,
        is_system=is_system,
    )


def make_template(
    notification_type_id: int = 1,
    *,
    template_type: str = TEMPLATE_TIER_SYSTEM_DEFAULT,
    subject: str = "{{business_name}} has been approved",
    body_html: str = "<p>Hi {{owner_name}}, visit {{dashboard_link}}</p>",
    body_text: str | None = None,
    is_active: bool = True,
    template_id: int | None = None,
) -> NotificationTemplate:
    return NotificationTemplate(
        id=template_id,
        notification_type_id=notification_type_id,
        template_type=template_type,
        subject=subject,
        body_html=body_html,
        body_text=body_text,
        is_active=is_active,
    )


@pytest.fixture()
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture()
def db_session():
    """Return a session bound to a freshly created in-memory schema."""

    from app.infrastructure import database, models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()
