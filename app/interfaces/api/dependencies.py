"""FastAPI dependency utilities."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import BackgroundTasks, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import BackgroundDispatcher
from app.config import Settings, get_settings
from app.infrastructure.database import SessionLocal
from app.infrastructure.email import DeliveryGateway, build_delivery_gateway


def get_delivery_gateway() -> DeliveryGateway:
    """Return the delivery gateway for the configured email provider.

    Gateways hold no connections, so one is built per request from the cached
    settings and follows any :func:`reset_settings_cache`.
    """

    return build_delivery_gateway(get_settings())


def get_session_factory() -> Callable[[], Session]:
    """Return the factory used by background dispatches to open their own session."""

    return SessionLocal


def get_app_settings() -> Settings:
    return get_settings()


def get_background_dispatcher(
    background_tasks: BackgroundTasks,
    gateway: DeliveryGateway = Depends(get_delivery_gateway),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> BackgroundDispatcher:
    """Return a dispatcher that runs after the response has been sent."""

    return BackgroundDispatcher(
        background_tasks.add_task,
        gateway=gateway,
        session_factory=session_factory,
    )


__all__ = [
    "get_app_settings",
    "get_background_dispatcher",
    "get_delivery_gateway",
    "get_session_factory",
]
