"""Tests for business event triggers and background execution."""

from datetime import date

from app.application.use_cases.notifications import (
    BackgroundDispatcher,
    Subscriber,
    notify_application_status_changed,
    notify_application_submitted,
    notify_business_registered,
    notify_business_status_changed,
    notify_business_subscribers,
    notify_job_posted,
    run_dispatch_safely,
)
from app.domain.entities import DispatchRequest, Recipient

from conftest import RecordingGateway

SITE = "https://jobs.example.com"


class RecordingDispatcher:
    def __init__(self):
        self.calls = []

    def submit(self, notification_type_key, *, recipient_user_id=None, recipient_email=None, context=None):
        self.calls.append(
            {
                "key": notification_type_key,
                "user_id": recipient_user_id,
                "email": recipient_email,
                "context": context,
            }
        )


def test_business_approval_notifies_owner():
    dispatcher = RecordingDispatcher()

    notified = notify_business_status_changed(
        dispatcher, site_url=SITE, business_name="Acme & Co", owner_id="o1", status="approved"
    )

    assert notified is True
    [call] = dispatcher.calls
    assert call["key"] == "business_approved"
    assert call["user_id"] == "o1"
    assert call["context"] == {
        "business_name": "Acme &amp; Co",
        "owner_name": "there",
        "dashboard_link": f"{SITE}/business",
    }


def test_pending_business_status_does_not_notify():
    dispatcher = RecordingDispatcher()

    notified = notify_business_status_changed(
        dispatcher, site_url=SITE, business_name="Acme", owner_id="o1", status="pending"
    )

    assert notified is False
    assert dispatcher.calls == []


def test_application_submitted_uses_email_when_name_missing():
    dispatcher = RecordingDispatcher()

    notify_application_submitted(
        dispatcher,
        site_url=SITE,
        business_owner_id="o1",
        business_name="Acme",
        job_title=None,
        applicant_email="cand@x.com",
        applied_on=date(2024, 5, 1),
    )

    context = dispatcher.calls[0]["context"]
    assert dispatcher.calls[0]["key"] == "new_application"
    assert context["applicant_name"] == "cand@x.com"
    assert context["job_title"] == "Unknown Position"
    assert context["applied_date"] == "2024-05-01"
    assert context["dashboard_link"] == f"{SITE}/business?tab=applications"


def test_application_status_maps_unknown_status_to_reviewed():
    dispatcher = RecordingDispatcher()

    accepted = notify_application_status_changed(
        dispatcher,
        site_url=SITE,
        applicant_id="a1",
        status="accepted",
        job_id="j1",
        job_title="Cook",
        business_name="Diner",
        applicant_first_name="Ada",
    )
    other = notify_application_status_changed(
        dispatcher,
        site_url=SITE,
        applicant_id="a1",
        status="interviewing",
        job_id="j1",
        job_title="Cook",
        business_name=None,
    )

    assert accepted == "application_accepted"
    assert other == "application_reviewed"
    assert dispatcher.calls[0]["context"]["applicant_name"] == "Ada"
    assert dispatcher.calls[1]["context"]["business_name"] == "Unknown Company"
    assert dispatcher.calls[1]["context"]["job_link"] == f"{SITE}/job/j1"


def test_admin_events_go_to_configured_admin_email():
    dispatcher = RecordingDispatcher()

    notify_business_registered(
        dispatcher,
        site_url=SITE,
        admin_email="admin@x.com",
        business_name="Acme",
        owner_email="owner@x.com",
    )
    notify_job_posted(
        dispatcher,
        site_url=SITE,
        admin_email="admin@x.com",
        job_id="j9",
        job_title="Cook",
        business_name=None,
        location="Austin",
    )

    registered, posted = dispatcher.calls
    assert registered["key"] == "new_business_registered"
    assert registered["email"] == "admin@x.com"
    assert registered["context"]["owner_name"] == "owner@x.com"
    assert registered["context"]["industry"] == "Not specified"
    assert posted["key"] == "new_job_posted"
    assert posted["context"]["business_name"] == "Unknown Business"
    assert posted["context"]["job_link"] == f"{SITE}/job/j9"


def test_subscribers_without_email_are_skipped_and_description_truncated():
    dispatcher = RecordingDispatcher()

    count = notify_business_subscribers(
        dispatcher,
        site_url=SITE,
        subscribers=[Subscriber("u1", "u1@x.com"), Subscriber("u2", None)],
        job_id="j1",
        job_title="Cook",
        company_name="Diner",
        job_location="Austin",
        job_type="full_time",
        job_description="x" * 250,
    )

    assert count == 1
    [call] = dispatcher.calls
    assert call["key"] == "company_new_job"
    assert call["email"] == "u1@x.com"
    assert call["context"]["job_description"] == "x" * 200 + "..."


def test_background_dispatcher_schedules_without_running():
    scheduled = []
    dispatcher = BackgroundDispatcher(
        lambda func, *args, **kwargs: scheduled.append((func, args, kwargs)),
        gateway=RecordingGateway(),
        session_factory=lambda: None,
    )

    request = dispatcher.submit("new_job_posted", recipient_email="admin@x.com", context={"a": 1})

    [(func, args, kwargs)] = scheduled
    assert func is run_dispatch_safely
    assert args == (request,)
    assert request.recipient == Recipient(user_id=None, email="admin@x.com")
    assert request.context == {"a": 1}


def test_run_dispatch_safely_swallows_failures_and_closes_session(db_session):
    closed = []

    class TrackingSession:
        def __init__(self, inner):
            self._inner = inner

        def __getattr__(self, name):
            return getattr(self._inner, name)

        def close(self):
            closed.append(True)

    request = DispatchRequest(
        notification_type_key="does_not_exist", recipient=Recipient(email="a@x.com")
    )

    result = run_dispatch_safely(
        request,
        gateway=RecordingGateway(),
        session_factory=lambda: TrackingSession(db_session),
    )

    assert result is None
    assert closed == [True]
