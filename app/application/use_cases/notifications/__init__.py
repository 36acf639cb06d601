"""Notification pipeline use cases."""

from .audit import AuditLogger, list_notification_logs
from .background import BackgroundDispatcher, run_dispatch_safely
from .catalog import DEFAULT_NOTIFICATION_CATALOG, seed_notification_catalog
from .dispatch import (
    DispatchOrchestrator,
    build_orchestrator,
    dispatch_notification,
    send_generic_email,
)
from .events import (
    Subscriber,
    notify_application_status_changed,
    notify_application_submitted,
    notify_business_registered,
    notify_business_status_changed,
    notify_business_subscribers,
    notify_job_posted,
)
from .notification_types import (
    create_notification_type,
    get_notification_type,
    list_notification_types,
    update_notification_type,
)
from .preferences import PreferenceResolver, list_user_preferences, set_user_preference
from .registry import NotificationTypeRegistry
from .rendering import (
    TemplateRenderer,
    escape_context_value,
    extract_variables,
    render_text,
    stringify_context,
)
from .templates import (
    TemplateSelector,
    list_notification_templates,
    set_template_active,
    upsert_admin_template,
)

__all__ = [
    "AuditLogger",
    "BackgroundDispatcher",
    "DEFAULT_NOTIFICATION_CATALOG",
    "DispatchOrchestrator",
    "NotificationTypeRegistry",
    "PreferenceResolver",
    "Subscriber",
    "TemplateRenderer",
    "TemplateSelector",
    "build_orchestrator",
    "create_notification_type",
    "dispatch_notification",
    "escape_context_value",
    "extract_variables",
    "get_notification_type",
    "list_notification_logs",
    "list_notification_templates",
    "list_notification_types",
    "list_user_preferences",
    "notify_application_status_changed",
    "notify_application_submitted",
    "notify_business_registered",
    "notify_business_status_changed",
    "notify_business_subscribers",
    "notify_job_posted",
    "render_text",
    "run_dispatch_safely",
    "seed_notification_catalog",
    "send_generic_email",
    "set_template_active",
    "set_user_preference",
    "stringify_context",
    "update_notification_type",
    "upsert_admin_template",
]
