"""Default notification types and their system templates."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import (
    CATEGORY_ADMIN,
    CATEGORY_APPLICANT,
    CATEGORY_BUSINESS,
    CATEGORY_SYSTEM,
    TEMPLATE_TIER_SYSTEM_DEFAULT,
    NotificationTemplate,
    NotificationType,
)
from app.infrastructure.repositories import (
    NotificationTemplateRepository,
    NotificationTypeRepository,
)

from .rendering import extract_variables

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    key: str
    name: str
    description: str
    category: str
    subject: str
    body_html: str
    body_text: str | None = None
    default_enabled: bool = True
    is_system: bool = False


DEFAULT_NOTIFICATION_CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        key="business_approved",
        name="Business approved",
        description="Sent to the owner when an administrator approves their business.",
        category=CATEGORY_BUSINESS,
        subject="{{business_name}} has been approved",
        body_html=(
            "<p>Hi {{owner_name}},</p>"
            "<p>Good news: <strong>{{business_name}}</strong> is now live on the job board.</p>"
            '<p><a href="{{dashboard_link}}">Open your dashboard</a> to start posting jobs.</p>'
        ),
        body_text=(
            "Hi {{owner_name}},\n\n{{business_name}} is now live on the job board.\n"
            "Open your dashboard: {{dashboard_link}}"
        ),
    ),
    CatalogEntry(
        key="business_rejected",
        name="Business rejected",
        description="Sent to the owner when an administrator rejects their business.",
        category=CATEGORY_BUSINESS,
        subject="Update on your {{business_name}} registration",
        body_html=(
            "<p>Hi {{owner_name}},</p>"
            "<p>We could not approve <strong>{{business_name}}</strong> at this time.</p>"
            '<p>Review your details from <a href="{{dashboard_link}}">your dashboard</a>.</p>'
        ),
    ),
    CatalogEntry(
        key="new_application",
        name="New application received",
        description="Sent to the business owner when a candidate applies to a job.",
        category=CATEGORY_BUSINESS,
        subject="New application for {{job_title}}",
        body_html=(
            "<p>{{applicant_name}} ({{applicant_email}}) applied to "
            "<strong>{{job_title}}</strong> at {{business_name}} on {{applied_date}}.</p>"
            '<p><a href="{{dashboard_link}}">Review applications</a></p>'
        ),
    ),
    CatalogEntry(
        key="application_reviewed",
        name="Application reviewed",
        description="Sent to an applicant when their application is reviewed.",
        category=CATEGORY_APPLICANT,
        subject="Your application for {{job_title}} was reviewed",
        body_html=(
            "<p>Hi {{applicant_name}},</p>"
            "<p>{{business_name}} has reviewed your application for "
            '<a href="{{job_link}}">{{job_title}}</a>.</p>'
        ),
    ),
    CatalogEntry(
        key="application_accepted",
        name="Application accepted",
        description="Sent to an applicant when their application is accepted.",
        category=CATEGORY_APPLICANT,
        subject="Good news about {{job_title}}",
        body_html=(
            "<p>Hi {{applicant_name}},</p>"
            "<p>{{business_name}} accepted your application for "
            '<a href="{{job_link}}">{{job_title}}</a>. They will be in touch soon.</p>'
        ),
    ),
    CatalogEntry(
        key="application_rejected",
        name="Application not selected",
        description="Sent to an applicant when their application is rejected.",
        category=CATEGORY_APPLICANT,
        subject="Update on your application for {{job_title}}",
        body_html=(
            "<p>Hi {{applicant_name}},</p>"
            "<p>{{business_name}} decided not to move forward with your application for "
            '<a href="{{job_link}}">{{job_title}}</a>.</p>'
        ),
    ),
    CatalogEntry(
        key="company_new_job",
        name="New job from a followed company",
        description="Sent to subscribers when a company they follow posts a job.",
        category=CATEGORY_APPLICANT,
        subject="{{company_name}} posted a new job: {{job_title}}",
        body_html=(
            "<p><strong>{{job_title}}</strong> ({{job_type}}, {{job_location}})</p>"
            "<p>{{job_description}}</p>"
            '<p><a href="{{job_url}}">View the job</a></p>'
        ),
    ),
    CatalogEntry(
        key="new_business_registered",
        name="New business registered",
        description="Sent to administrators when a business signs up.",
        category=CATEGORY_ADMIN,
        subject="New business registered: {{business_name}}",
        body_html=(
            "<p>{{owner_name}} registered <strong>{{business_name}}</strong> "
            "({{industry}}).</p>"
            '<p><a href="{{admin_link}}">Review pending businesses</a></p>'
        ),
    ),
    CatalogEntry(
        key="new_job_posted",
        name="New job posted",
        description="Sent to administrators when a business publishes a job.",
        category=CATEGORY_ADMIN,
        subject="New job posted: {{job_title}}",
        body_html=(
            "<p>{{business_name}} posted <strong>{{job_title}}</strong> in {{location}}.</p>"
            '<p><a href="{{job_link}}">View the job</a></p>'
        ),
    ),
    CatalogEntry(
        key="account_data_deleted",
        name="Account data deleted",
        description="Confirms that a personal data deletion request was completed.",
        category=CATEGORY_SYSTEM,
        subject="Your account data has been deleted",
        body_html=(
            "<p>Your request to delete your personal data was completed on "
            "{{completed_date}}.</p>"
        ),
        is_system=True,
    ),
)


def seed_notification_catalog(
    session: Session, entries: tuple[CatalogEntry, ...] = DEFAULT_NOTIFICATION_CATALOG
) -> list[NotificationType]:
    """Create missing types and system templates. Existing rows are left untouched."""

    type_repository = NotificationTypeRepository(session)
    template_repository = NotificationTemplateRepository(session)
    created: list[NotificationType] = []

    for entry in entries:
        notification_type = type_repository.get_by_key(entry.key)
        if notification_type is None:
            notification_type = type_repository.create(
                NotificationType(
                    id=None,
                    key=entry.key,
                    name=entry.name,
                    description=entry.description,
                    category=entry.category,
                    default_enabled=entry.default_enabled,
                    is_system=entry.is_system,
                )
            )
            created.append(notification_type)
            logger.info("Registered notification type %s", entry.key)

        existing = template_repository.get_by_tier(
            notification_type.id, TEMPLATE_TIER_SYSTEM_DEFAULT
        )
        if existing is None:
            template_repository.upsert(
                NotificationTemplate(
                    id=None,
                    notification_type_id=notification_type.id,
                    template_type=TEMPLATE_TIER_SYSTEM_DEFAULT,
                    subject=entry.subject,
                    body_html=entry.body_html,
                    body_text=entry.body_text,
                    variables=extract_variables(entry.subject, entry.body_html, entry.body_text),
                    is_active=True,
                )
            )

    return created


__all__ = ["CatalogEntry", "DEFAULT_NOTIFICATION_CATALOG", "seed_notification_catalog"]
