"""Hooks called after business mutations; they schedule notifications and return."""

from fastapi import APIRouter, Depends, status

from app.application.use_cases.notifications import (
    BackgroundDispatcher,
    Subscriber,
    notify_application_status_changed,
    notify_application_submitted,
    notify_business_registered,
    notify_business_status_changed,
    notify_business_subscribers,
    notify_job_posted,
)
from app.config import Settings
from app.interfaces.api.dependencies import get_app_settings, get_background_dispatcher
from app.interfaces.api.schemas import (
    ApplicationStatusEvent,
    ApplicationSubmittedEvent,
    BusinessRegisteredEvent,
    BusinessStatusEvent,
    EventAccepted,
    JobPostedEvent,
)

router = APIRouter(prefix="/events", tags=["events"])


@router.post("/business-status", response_model=EventAccepted, status_code=status.HTTP_202_ACCEPTED)
def business_status_changed(
    payload: BusinessStatusEvent,
    dispatcher: BackgroundDispatcher = Depends(get_background_dispatcher),
    settings: Settings = Depends(get_app_settings),
) -> EventAccepted:
    """Notify the owner when a business is approved or rejected."""

    scheduled = notify_business_status_changed(
        dispatcher,
        site_url=settings.site_url,
        business_name=payload.business_name,
        owner_id=payload.owner_id,
        status=payload.status,
    )
    return EventAccepted(scheduled=int(scheduled))


@router.post("/applications", response_model=EventAccepted, status_code=status.HTTP_202_ACCEPTED)
def application_submitted(
    payload: ApplicationSubmittedEvent,
    dispatcher: BackgroundDispatcher = Depends(get_background_dispatcher),
    settings: Settings = Depends(get_app_settings),
) -> EventAccepted:
    """Notify the business owner about a new application."""

    notify_application_submitted(
        dispatcher,
        site_url=settings.site_url,
        business_owner_id=payload.business_owner_id,
        business_name=payload.business_name,
        job_title=payload.job_title,
        applicant_email=payload.applicant_email,
        applicant_first_name=payload.applicant_first_name,
        applicant_last_name=payload.applicant_last_name,
        applied_on=payload.applied_on,
    )
    return EventAccepted(scheduled=1)


@router.post(
    "/application-status", response_model=EventAccepted, status_code=status.HTTP_202_ACCEPTED
)
def application_status_changed(
    payload: ApplicationStatusEvent,
    dispatcher: BackgroundDispatcher = Depends(get_background_dispatcher),
    settings: Settings = Depends(get_app_settings),
) -> EventAccepted:
    """Notify the applicant about a status change of their application."""

    notify_application_status_changed(
        dispatcher,
        site_url=settings.site_url,
        applicant_id=payload.applicant_id,
        status=payload.status,
        job_id=payload.job_id,
        job_title=payload.job_title,
        business_name=payload.business_name,
        applicant_first_name=payload.applicant_first_name,
        applicant_last_name=payload.applicant_last_name,
    )
    return EventAccepted(scheduled=1)


@router.post("/businesses", response_model=EventAccepted, status_code=status.HTTP_202_ACCEPTED)
def business_registered(
    payload: BusinessRegisteredEvent,
    dispatcher: BackgroundDispatcher = Depends(get_background_dispatcher),
    settings: Settings = Depends(get_app_settings),
) -> EventAccepted:
    """Notify administrators about a new business registration."""

    notify_business_registered(
        dispatcher,
        site_url=settings.site_url,
        admin_email=settings.admin_notification_email,
        business_name=payload.business_name,
        owner_email=payload.owner_email,
        owner_first_name=payload.owner_first_name,
        owner_last_name=payload.owner_last_name,
        industry=payload.industry,
    )
    return EventAccepted(scheduled=1)


@router.post("/jobs", response_model=EventAccepted, status_code=status.HTTP_202_ACCEPTED)
def job_posted(
    payload: JobPostedEvent,
    dispatcher: BackgroundDispatcher = Depends(get_background_dispatcher),
    settings: Settings = Depends(get_app_settings),
) -> EventAccepted:
    """Notify administrators and the company's subscribers about a new job."""

    notify_job_posted(
        dispatcher,
        site_url=settings.site_url,
        admin_email=settings.admin_notification_email,
        job_id=payload.job_id,
        job_title=payload.job_title,
        business_name=payload.business_name,
        location=payload.location,
    )
    subscribers_notified = notify_business_subscribers(
        dispatcher,
        site_url=settings.site_url,
        subscribers=[
            Subscriber(user_id=item.user_id, email=item.email) for item in payload.subscribers
        ],
        job_id=payload.job_id,
        job_title=payload.job_title,
        company_name=payload.business_name,
        job_location=payload.location,
        job_type=payload.job_type,
        job_description=payload.description,
    )
    return EventAccepted(scheduled=1 + subscribers_notified)


__all__ = ["router"]
