"""Integration tests for the notification API endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.application.use_cases.notifications import (
    list_notification_logs,
    seed_notification_catalog,
)
from app.domain.entities import Profile
from app.domain.exceptions import DeliveryError
from app.infrastructure.repositories import NotificationTypeRepository, ProfileRepository
from app.interfaces.api.dependencies import get_delivery_gateway

from conftest import RecordingGateway

APPROVAL_CONTEXT = {
    "business_name": "Acme",
    "owner_name": "there",
    "dashboard_link": "https://x/business",
}


@pytest.fixture()
def seeded(db_session):
    seed_notification_catalog(db_session)
    ProfileRepository(db_session).upsert(Profile(id="owner-1", email="owner@x.com"))
    return db_session


@pytest.fixture()
def client(seeded, gateway):
    """Return a test client whose email provider records messages."""

    from main import create_app

    app = create_app()
    app.dependency_overrides[get_delivery_gateway] = lambda: gateway
    with TestClient(app) as test_client:
        yield test_client
        # Release the test session's connection before the lifespan disposes the engine.
        seeded.close()


def _logs(session, **filters):
    session.expire_all()
    return list_notification_logs(session, **filters)


def _type_id(session, key: str) -> int:
    return NotificationTypeRepository(session).get_by_key(key).id


def test_dispatch_sends_with_system_default(client, seeded, gateway):
    response = client.post(
        "/notifications/dispatch",
        json={
            "notificationType": "business_approved",
            "recipientUserId": "owner-1",
            "context": APPROVAL_CONTEXT,
        },
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "messageId": "<msg-1@mg>"}
    assert gateway.sent[0]["to"] == "owner@x.com"
    assert gateway.sent[0]["subject"] == "Acme has been approved"
    [entry] = _logs(seeded)
    assert entry.status == "sent"
    assert entry.metadata["message_id"] == "<msg-1@mg>"


def test_admin_override_takes_precedence(client, seeded, gateway):
    type_id = _type_id(seeded, "business_approved")

    response = client.put(
        f"/notification-templates/{type_id}/admin-global",
        json={"subject": "Approved: {{business_name}}", "body_html": "<p>{{owner_name}}</p>"},
    )
    assert response.status_code == 200
    assert response.json()["variables"] == ["business_name", "owner_name"]

    client.post(
        "/notifications/dispatch",
        json={
            "notificationType": "business_approved",
            "recipientEmail": "owner@x.com",
            "context": APPROVAL_CONTEXT,
        },
    )

    assert gateway.sent[0]["subject"] == "Approved: Acme"

    template_id = response.json()["id"]
    response = client.patch(
        f"/notification-templates/{template_id}/status", json={"is_active": False}
    )
    assert response.status_code == 200

    client.post(
        "/notifications/dispatch",
        json={
            "notificationType": "business_approved",
            "recipientEmail": "owner@x.com",
            "context": APPROVAL_CONTEXT,
        },
    )

    assert gateway.sent[1]["subject"] == "Acme has been approved"


def test_disabled_preference_returns_skipped(client, seeded, gateway):
    type_id = _type_id(seeded, "business_approved")
    response = client.put(
        f"/users/owner-1/notification-preferences/{type_id}", json={"is_enabled": False}
    )
    assert response.status_code == 200

    response = client.post(
        "/notifications/dispatch",
        json={
            "notificationType": "business_approved",
            "recipientUserId": "owner-1",
            "recipientEmail": "owner@x.com",
            "context": APPROVAL_CONTEXT,
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "skipped": True,
        "reason": "user_preference_disabled",
    }
    assert gateway.sent == []
    [entry] = _logs(seeded)
    assert entry.status == "skipped"
    assert entry.subject == "N/A"


def test_unknown_type_returns_404_without_log(client, seeded, gateway):
    response = client.post(
        "/notifications/dispatch",
        json={"notificationType": "business_aproved", "recipientEmail": "a@x.com"},
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Notification type not found"}
    assert gateway.sent == []
    assert _logs(seeded) == []


@pytest.mark.parametrize(
    "payload",
    [
        {"recipientEmail": "a@x.com"},
        {"notificationType": "business_approved"},
        {"notificationType": "", "recipientUserId": "owner-1"},
    ],
)
def test_missing_required_fields_return_400(client, payload):
    response = client.post("/notifications/dispatch", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_unresolvable_recipient_returns_400_and_logs_skip(client, seeded, gateway):
    response = client.post(
        "/notifications/dispatch",
        json={"notificationType": "business_approved", "recipientUserId": "ghost"},
    )

    assert response.status_code == 400
    assert "Could not determine recipient email" in response.json()["error"]
    [entry] = _logs(seeded)
    assert entry.status == "skipped"
    assert entry.metadata == {"reason": "no_recipient"}


def test_delivery_failure_returns_500_and_logs_failure(client, seeded, gateway):
    gateway.error = DeliveryError("Forbidden", status_code=401)

    response = client.post(
        "/notifications/dispatch",
        json={
            "notificationType": "business_approved",
            "recipientEmail": "owner@x.com",
            "context": APPROVAL_CONTEXT,
        },
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Forbidden"}
    [entry] = _logs(seeded, status="failed")
    assert entry.error_message == "Forbidden"


def test_missing_template_returns_500(client, seeded):
    response = client.post(
        "/notification-types/",
        json={"key": "weekly_digest", "name": "Weekly digest", "category": "applicant"},
    )
    assert response.status_code == 201

    response = client.post(
        "/notifications/dispatch",
        json={"notificationType": "weekly_digest", "recipientEmail": "a@x.com"},
    )

    assert response.status_code == 500
    assert "weekly_digest" in response.json()["error"]


def test_system_type_cannot_be_disabled(client, seeded):
    type_id = _type_id(seeded, "account_data_deleted")

    response = client.put(
        f"/users/owner-1/notification-preferences/{type_id}", json={"is_enabled": False}
    )

    assert response.status_code == 400


def test_preferences_listing_returns_explicit_rows(client, seeded):
    type_id = _type_id(seeded, "new_application")
    client.put(f"/users/owner-1/notification-preferences/{type_id}", json={"is_enabled": False})

    response = client.get("/users/owner-1/notification-preferences")

    assert response.status_code == 200
    [row] = response.json()
    assert row["notification_type_id"] == type_id
    assert row["is_enabled"] is False


def test_notification_types_listing_and_lookup(client):
    response = client.get("/notification-types/", params={"category": "admin"})
    assert response.status_code == 200
    assert {item["key"] for item in response.json()} == {
        "new_business_registered",
        "new_job_posted",
    }

    assert client.get("/notification-types/business_approved").status_code == 200
    assert client.get("/notification-types/nope").status_code == 404

    duplicate = client.post(
        "/notification-types/",
        json={"key": "business_approved", "name": "Dup", "category": "business"},
    )
    assert duplicate.status_code == 409


def test_generic_email_endpoint(client, seeded, gateway):
    response = client.post(
        "/emails/send",
        json={"to": ["a@x.com"], "subject": "Hi", "html": "<p>Hi</p>", "replyTo": "r@x.com"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "messageId": "<msg-1@mg>"}
    assert gateway.sent[0]["reply_to"] == "r@x.com"

    missing = client.post("/emails/send", json={"to": "a@x.com", "subject": "Hi"})
    assert missing.status_code == 400


def test_logs_endpoint_filters_by_status(client, seeded, gateway):
    client.post(
        "/notifications/dispatch",
        json={"notificationType": "business_approved", "recipientUserId": "ghost"},
    )
    client.post(
        "/notifications/dispatch",
        json={
            "notificationType": "business_approved",
            "recipientEmail": "owner@x.com",
            "context": APPROVAL_CONTEXT,
        },
    )

    response = client.get("/notification-logs/", params={"status": "sent"})

    assert response.status_code == 200
    [row] = response.json()
    assert row["recipient_email"] == "owner@x.com"
    assert client.get("/notification-logs/", params={"status": "bogus"}).status_code == 422


def test_business_status_event_dispatches_in_background(client, seeded, gateway):
    response = client.post(
        "/events/business-status",
        json={"business_name": "Acme", "owner_id": "owner-1", "status": "approved"},
    )

    assert response.status_code == 202
    assert response.json() == {"accepted": True, "scheduled": 1}
    assert gateway.sent[0]["to"] == "owner@x.com"
    assert gateway.sent[0]["body_html"].count("https://jobs.example.com/business") == 1


def test_event_failure_does_not_affect_response(client, seeded, gateway):
    gateway.error = DeliveryError("Mailgun configuration missing")

    response = client.post(
        "/events/business-status",
        json={"business_name": "Acme", "owner_id": "owner-1", "status": "rejected"},
    )

    assert response.status_code == 202
    [entry] = _logs(seeded)
    assert entry.status == "failed"
    assert entry.notification_type_key == "business_rejected"


def test_job_posted_event_notifies_admin_and_subscribers(client, seeded, gateway):
    response = client.post(
        "/events/jobs",
        json={
            "job_id": "j1",
            "job_title": "Cook",
            "business_name": "Diner",
            "location": "Austin",
            "subscribers": [
                {"user_id": "s1", "email": "s1@x.com"},
                {"user_id": "s2", "email": None},
            ],
        },
    )

    assert response.status_code == 202
    assert response.json()["scheduled"] == 2
    assert sorted(message["to"] for message in gateway.sent) == [
        "admin@jobs.example.com",
        "s1@x.com",
    ]
