"""Notifications emitted when business data changes.

Each helper builds the rendering context for one business event and submits
it to a dispatcher without waiting for delivery. Names and other text typed
by end users are escaped here because the renderer inserts values verbatim.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from .rendering import escape_context_value

DESCRIPTION_PREVIEW_LENGTH = 200

BUSINESS_STATUS_NOTIFICATIONS: dict[str, str] = {
    "approved": "business_approved",
    "rejected": "business_rejected",
}
APPLICATION_STATUS_NOTIFICATIONS: dict[str, str] = {
    "accepted": "application_accepted",
    "rejected": "application_rejected",
    "reviewed": "application_reviewed",
}


class Dispatcher(Protocol):
    def submit(
        self,
        notification_type_key: str,
        *,
        recipient_user_id: str | None = None,
        recipient_email: str | None = None,
        context: dict | None = None,
    ) -> object:
        ...


@dataclass(frozen=True)
class Subscriber:
    user_id: str | None
    email: str | None


def _join_name(first_name: str | None, last_name: str | None) -> str:
    return f"{first_name or ''} {last_name or ''}".strip()


def _truncate(text: str | None, limit: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    text = text or ""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def notify_business_status_changed(
    dispatcher: Dispatcher,
    *,
    site_url: str,
    business_name: str,
    owner_id: str,
    status: str,
) -> bool:
    """Tell the owner their business was approved or rejected.

    Other status changes (pending, draft) do not notify anyone.
    """

    notification_type_key = BUSINESS_STATUS_NOTIFICATIONS.get(status)
    if notification_type_key is None:
        return False

    dispatcher.submit(
        notification_type_key,
        recipient_user_id=owner_id,
        context={
            "business_name": escape_context_value(business_name),
            "owner_name": "there",
            "dashboard_link": f"{site_url}/business",
        },
    )
    return True


def notify_application_submitted(
    dispatcher: Dispatcher,
    *,
    site_url: str,
    business_owner_id: str,
    business_name: str,
    job_title: str | None,
    applicant_email: str,
    applicant_first_name: str | None = None,
    applicant_last_name: str | None = None,
    applied_on: date | None = None,
) -> None:
    """Tell the business owner a candidate applied to one of their jobs."""

    applicant_name = _join_name(applicant_first_name, applicant_last_name) or applicant_email
    applied_on = applied_on or date.today()
    dispatcher.submit(
        "new_application",
        recipient_user_id=business_owner_id,
        context={
            "applicant_name": escape_context_value(applicant_name),
            "applicant_email": escape_context_value(applicant_email),
            "job_title": escape_context_value(job_title or "Unknown Position"),
            "business_name": escape_context_value(business_name),
            "dashboard_link": f"{site_url}/business?tab=applications",
            "applied_date": applied_on.isoformat(),
        },
    )


def notify_application_status_changed(
    dispatcher: Dispatcher,
    *,
    site_url: str,
    applicant_id: str,
    status: str,
    job_id: str | None,
    job_title: str | None,
    business_name: str | None,
    applicant_first_name: str | None = None,
    applicant_last_name: str | None = None,
) -> str:
    """Tell an applicant that their application was reviewed, accepted or rejected."""

    notification_type_key = APPLICATION_STATUS_NOTIFICATIONS.get(
        status, APPLICATION_STATUS_NOTIFICATIONS["reviewed"]
    )
    applicant_name = _join_name(applicant_first_name, applicant_last_name) or "there"
    dispatcher.submit(
        notification_type_key,
        recipient_user_id=applicant_id,
        context={
            "applicant_name": escape_context_value(applicant_name),
            "job_title": escape_context_value(job_title or "Unknown Position"),
            "business_name": escape_context_value(business_name or "Unknown Company"),
            "job_link": f"{site_url}/job/{job_id}",
        },
    )
    return notification_type_key


def notify_business_registered(
    dispatcher: Dispatcher,
    *,
    site_url: str,
    admin_email: str,
    business_name: str,
    owner_email: str | None,
    owner_first_name: str | None = None,
    owner_last_name: str | None = None,
    industry: str | None = None,
) -> None:
    """Ask administrators to review a newly registered business."""

    owner_name = _join_name(owner_first_name, owner_last_name) or owner_email or "Unknown"
    dispatcher.submit(
        "new_business_registered",
        recipient_email=admin_email,
        context={
            "business_name": escape_context_value(business_name),
            "owner_name": escape_context_value(owner_name),
            "industry": escape_context_value(industry or "Not specified"),
            "admin_link": f"{site_url}/admin?tab=businesses",
        },
    )


def notify_job_posted(
    dispatcher: Dispatcher,
    *,
    site_url: str,
    admin_email: str,
    job_id: str,
    job_title: str,
    business_name: str | None,
    location: str | None,
) -> None:
    """Tell administrators that a business published a new job."""

    dispatcher.submit(
        "new_job_posted",
        recipient_email=admin_email,
        context={
            "job_title": escape_context_value(job_title),
            "business_name": escape_context_value(business_name or "Unknown Business"),
            "location": escape_context_value(location or ""),
            "job_link": f"{site_url}/job/{job_id}",
        },
    )


def notify_business_subscribers(
    dispatcher: Dispatcher,
    *,
    site_url: str,
    subscribers: Iterable[Subscriber],
    job_id: str,
    job_title: str,
    company_name: str | None,
    job_location: str | None,
    job_type: str | None,
    job_description: str | None,
) -> int:
    """Announce a new job to every subscriber of the company. Returns the count."""

    context = {
        "company_name": escape_context_value(company_name or "Unknown Company"),
        "job_title": escape_context_value(job_title),
        "job_location": escape_context_value(job_location or ""),
        "job_type": escape_context_value(job_type or ""),
        "job_description": escape_context_value(_truncate(job_description)),
        "job_url": f"{site_url}/job/{job_id}",
    }
    submitted = 0
    for subscriber in subscribers:
        if not subscriber.email:
            continue
        dispatcher.submit(
            "company_new_job",
            recipient_user_id=subscriber.user_id,
            recipient_email=subscriber.email,
            context=dict(context),
        )
        submitted += 1
    return submitted


__all__ = [
    "APPLICATION_STATUS_NOTIFICATIONS",
    "BUSINESS_STATUS_NOTIFICATIONS",
    "DESCRIPTION_PREVIEW_LENGTH",
    "Dispatcher",
    "Subscriber",
    "notify_application_status_changed",
    "notify_application_submitted",
    "notify_business_registered",
    "notify_business_status_changed",
    "notify_business_subscribers",
    "notify_job_posted",
]
