"""Tests for the SQLAlchemy backed repositories and use cases."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import Text

from app.application.use_cases.notifications import (
    DEFAULT_NOTIFICATION_CATALOG,
    create_notification_type,
    dispatch_notification,
    list_notification_logs,
    list_user_preferences,
    seed_notification_catalog,
    send_generic_email,
    set_template_active,
    set_user_preference,
    update_notification_type,
    upsert_admin_template,
)
from app.domain.entities import (
    RECIPIENT_USER_ID_MAX_LENGTH,
    TEMPLATE_TIER_ADMIN_GLOBAL,
    TEMPLATE_TIER_SYSTEM_DEFAULT,
    NotificationLog,
    Profile,
    Recipient,
    UserNotificationPreference,
)
from app.domain.exceptions import (
    DeliveryError,
    InvalidPreferenceError,
    NotificationTypeNotFoundError,
)
from app.infrastructure.models import NotificationLogModel
from app.infrastructure.repositories import (
    NotificationLogRepository,
    NotificationPreferenceRepository,
    NotificationTemplateRepository,
    NotificationTypeRepository,
    ProfileRepository,
)

from conftest import RecordingGateway


def test_seed_registers_catalog_once(db_session):
    created = seed_notification_catalog(db_session)
    again = seed_notification_catalog(db_session)

    assert len(created) == len(DEFAULT_NOTIFICATION_CATALOG)
    assert again == []
    types = NotificationTypeRepository(db_session).list()
    assert {item.key for item in types} == {entry.key for entry in DEFAULT_NOTIFICATION_CATALOG}
    account = NotificationTypeRepository(db_session).get_by_key("account_data_deleted")
    assert account.is_system is True


def test_seed_stores_system_default_with_variables(db_session):
    seed_notification_catalog(db_session)
    notification_type = NotificationTypeRepository(db_session).get_by_key("business_approved")

    template = NotificationTemplateRepository(db_session).get_by_tier(
        notification_type.id, TEMPLATE_TIER_SYSTEM_DEFAULT
    )

    assert template.is_active is True
    assert template.variables == ["business_name", "owner_name", "dashboard_link"]


def test_admin_template_upsert_replaces_previous_override(db_session):
    seed_notification_catalog(db_session)
    notification_type = NotificationTypeRepository(db_session).get_by_key("business_approved")

    first = upsert_admin_template(
        db_session,
        notification_type_id=notification_type.id,
        subject="First {{business_name}}",
        body_html="<p>1</p>",
    )
    second = upsert_admin_template(
        db_session,
        notification_type_id=notification_type.id,
        subject="Second {{business_name}}",
        body_html="<p>2</p>",
    )

    assert first.id == second.id
    assert second.template_type == TEMPLATE_TIER_ADMIN_GLOBAL
    assert second.variables == ["business_name"]
    templates = NotificationTemplateRepository(db_session).list(
        notification_type_id=notification_type.id
    )
    assert len(templates) == 2


def test_admin_template_for_unknown_type_is_rejected(db_session):
    with pytest.raises(ValueError):
        upsert_admin_template(
            db_session, notification_type_id=999, subject="S", body_html="<p>B</p>"
        )


def test_deactivated_template_is_not_listed_as_active(db_session):
    seed_notification_catalog(db_session)
    notification_type = NotificationTypeRepository(db_session).get_by_key("business_approved")
    override = upsert_admin_template(
        db_session,
        notification_type_id=notification_type.id,
        subject="Override",
        body_html="<p>o</p>",
    )

    set_template_active(db_session, override.id, is_active=False)

    active = NotificationTemplateRepository(db_session).list_active_for_type(
        notification_type.id
    )
    assert [item.template_type for item in active] == [TEMPLATE_TIER_SYSTEM_DEFAULT]


def test_notification_type_create_and_update(db_session):
    created = create_notification_type(
        db_session, key=" weekly_digest ", name="Weekly digest", category="applicant"
    )

    assert created.key == "weekly_digest"
    with pytest.raises(ValueError):
        create_notification_type(
            db_session, key="weekly_digest", name="Again", category="applicant"
        )
    with pytest.raises(ValueError):
        create_notification_type(db_session, key="x", name="X", category="marketing")

    updated = update_notification_type(db_session, created.id, default_enabled=False)
    assert updated.default_enabled is False
    assert updated.key == "weekly_digest"

    with pytest.raises(NotificationTypeNotFoundError):
        update_notification_type(db_session, 999, name="missing")


def test_preferences_are_upserted_per_user_and_type(db_session):
    seed_notification_catalog(db_session)
    notification_type = NotificationTypeRepository(db_session).get_by_key("new_application")

    set_user_preference(
        db_session, user_id="u1", notification_type_id=notification_type.id, is_enabled=False
    )
    set_user_preference(
        db_session,
        user_id="u1",
        notification_type_id=notification_type.id,
        is_enabled=True,
        custom_template_subject="Mine",
    )

    [preference] = list_user_preferences(db_session, "u1")
    assert preference.is_enabled is True
    assert preference.custom_template_subject == "Mine"
    assert list_user_preferences(db_session, "u2") == []


def test_system_type_cannot_be_disabled(db_session):
    seed_notification_catalog(db_session)
    notification_type = NotificationTypeRepository(db_session).get_by_key("account_data_deleted")

    with pytest.raises(InvalidPreferenceError):
        set_user_preference(
            db_session,
            user_id="u1",
            notification_type_id=notification_type.id,
            is_enabled=False,
        )


def test_preference_for_unknown_type_is_rejected(db_session):
    with pytest.raises(ValueError):
        set_user_preference(db_session, user_id="u1", notification_type_id=42, is_enabled=True)


def test_logs_are_listed_newest_first_with_filters(db_session):
    repository = NotificationLogRepository(db_session)
    for index, status in enumerate(["sent", "failed", "sent"]):
        repository.create(
            NotificationLog(
                id=None,
                notification_type_key="business_approved" if index else "new_job_posted",
                recipient_email=f"user{index}@x.com",
                subject=f"S{index}",
                status=status,
                metadata={"index": index},
            )
        )

    logs = list_notification_logs(db_session)
    assert [entry.subject for entry in logs] == ["S2", "S1", "S0"]
    assert logs[0].metadata == {"index": 2}
    assert [entry.subject for entry in list_notification_logs(db_session, status="failed")] == [
        "S1"
    ]
    assert [
        entry.subject
        for entry in list_notification_logs(db_session, notification_type_key="new_job_posted")
    ] == ["S0"]
    assert len(list_notification_logs(db_session, limit=1)) == 1


def test_dispatch_against_database_resolves_profile_and_logs(db_session):
    seed_notification_catalog(db_session)
    ProfileRepository(db_session).upsert(Profile(id="owner-1", email="owner@x.com"))
    gateway = RecordingGateway(message_id="<db@mg>")

    result = dispatch_notification(
        db_session,
        gateway,
        notification_type_key="business_approved",
        recipient=Recipient(user_id="owner-1"),
        context={
            "business_name": "Acme",
            "owner_name": "there",
            "dashboard_link": "https://jobs.example.com/business",
        },
    )

    assert result.sent
    assert gateway.sent[0]["to"] == "owner@x.com"
    assert gateway.sent[0]["subject"] == "Acme has been approved"
    [entry] = list_notification_logs(db_session)
    assert entry.id == result.log_id
    assert entry.status == "sent"
    assert entry.recipient_user_id == "owner-1"
    assert entry.metadata["message_id"] == "<db@mg>"


def test_generic_email_is_logged_under_generic_key(db_session):
    gateway = RecordingGateway(message_id="<g@mg>")

    result = send_generic_email(
        db_session, gateway, to=["a@x.com", "b@x.com"], subject="Hi", html="<p>Hi</p>"
    )

    assert result.message_id == "<g@mg>"
    [entry] = list_notification_logs(db_session)
    assert entry.notification_type_key == "generic_email"
    assert entry.recipient_email == "a@x.com"


def test_generic_email_failure_is_logged_and_raised(db_session):
    gateway = RecordingGateway(error=DeliveryError("Mailgun configuration missing"))

    with pytest.raises(DeliveryError):
        send_generic_email(db_session, gateway, to="a@x.com", subject="Hi", html="<p>Hi</p>")

    [entry] = list_notification_logs(db_session)
    assert entry.status == "failed"
    assert entry.error_message == "Mailgun configuration missing"


def test_concurrent_first_toggle_updates_existing_row(db_session, monkeypatch):
    seed_notification_catalog(db_session)
    notification_type = NotificationTypeRepository(db_session).get_by_key("new_application")
    repository = NotificationPreferenceRepository(db_session)
    repository.upsert(
        UserNotificationPreference(
            id=None, user_id="u1", notification_type_id=notification_type.id, is_enabled=True
        )
    )

    # The first lookup misses the row, as if another request inserted it meanwhile.
    real_get_model = repository._get_model
    lookups = []

    def stale_get_model(user_id, notification_type_id):
        lookups.append(user_id)
        if len(lookups) == 1:
            return None
        return real_get_model(user_id, notification_type_id)

    monkeypatch.setattr(repository, "_get_model", stale_get_model)

    saved = repository.upsert(
        UserNotificationPreference(
            id=None, user_id="u1", notification_type_id=notification_type.id, is_enabled=False
        )
    )

    assert saved.is_enabled is False
    [preference] = list_user_preferences(db_session, "u1")
    assert preference.is_enabled is False


def test_dispatch_with_non_string_context_values_is_still_logged(db_session):
    seed_notification_catalog(db_session)
    gateway = RecordingGateway(message_id="<ctx@mg>")

    result = dispatch_notification(
        db_session,
        gateway,
        notification_type_key="business_approved",
        recipient=Recipient(email="owner@x.com"),
        context={
            "business_name": "Acme",
            "approved_on": date(2024, 1, 2),
            "fee": Decimal("9.50"),
            "owner_name": None,
        },
    )

    assert result.sent
    [entry] = list_notification_logs(db_session)
    assert entry.id == result.log_id
    assert entry.metadata["approved_on"] == "2024-01-02"
    assert entry.metadata["fee"] == "9.50"
    assert entry.metadata["owner_name"] == ""
    assert entry.metadata["message_id"] == "<ctx@mg>"


def test_long_rendered_subject_and_user_id_are_logged(db_session):
    seed_notification_catalog(db_session)
    long_user_id = "u" * 300
    gateway = RecordingGateway()

    dispatch_notification(
        db_session,
        gateway,
        notification_type_key="business_approved",
        recipient=Recipient(user_id=long_user_id, email="owner@x.com"),
        context={"business_name": "A" * 300},
    )

    [entry] = list_notification_logs(db_session)
    assert entry.subject == gateway.sent[0]["subject"]
    assert len(entry.subject) > 255
    assert entry.recipient_user_id == long_user_id[:RECIPIENT_USER_ID_MAX_LENGTH]
    assert isinstance(NotificationLogModel.__table__.c.subject.type, Text)
