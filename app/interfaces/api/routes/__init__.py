from fastapi import FastAPI

from .events import router as events_router
from .notification_logs import router as notification_logs_router
from .notification_templates import router as notification_templates_router
from .notification_types import router as notification_types_router
from .notifications import router as notifications_router
from .preferences import router as preferences_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(notifications_router)
    app.include_router(notification_types_router)
    app.include_router(notification_templates_router)
    app.include_router(notification_logs_router)
    app.include_router(preferences_router)
    app.include_router(events_router)
