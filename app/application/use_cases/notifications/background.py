"""Fire-and-forget execution of dispatches.

Business operations trigger notifications after their own work has
succeeded. The dispatch runs after the primary response and any failure is
caught at the task boundary and written to the server log, so it can never
alter the outcome of the operation that triggered it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import DispatchRequest, DispatchResult, Recipient
from app.infrastructure.email import DeliveryGateway

from .dispatch import dispatch_notification

logger = logging.getLogger(__name__)

Scheduler = Callable[..., Any]


def run_dispatch_safely(
    request: DispatchRequest,
    *,
    gateway: DeliveryGateway,
    session_factory: Callable[[], Session],
) -> DispatchResult | None:
    """Run ``request`` in its own session and swallow every failure."""

    session = session_factory()
    try:
        return dispatch_notification(
            session,
            gateway,
            notification_type_key=request.notification_type_key,
            recipient=request.recipient,
            context=request.context,
        )
    except Exception:
        logger.exception(
            "Background dispatch of %s failed", request.notification_type_key
        )
        return None
    finally:
        session.close()


class BackgroundDispatcher:
    """Hand dispatch requests to a scheduler without waiting for them.

    ``schedule`` receives ``(func, *args, **kwargs)``; in the API it is
    ``BackgroundTasks.add_task``.
    """

    def __init__(
        self,
        schedule: Scheduler,
        *,
        gateway: DeliveryGateway,
        session_factory: Callable[[], Session],
    ) -> None:
        self._schedule = schedule
        self._gateway = gateway
        self._session_factory = session_factory

    def submit(
        self,
        notification_type_key: str,
        *,
        recipient_user_id: str | None = None,
        recipient_email: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> DispatchRequest:
        request = DispatchRequest(
            notification_type_key=notification_type_key,
            recipient=Recipient(user_id=recipient_user_id, email=recipient_email),
            context=dict(context or {}),
        )
        self._schedule(
            run_dispatch_safely,
            request,
            gateway=self._gateway,
            session_factory=self._session_factory,
        )
        logger.debug("Scheduled %s dispatch", notification_type_key)
        return request


__all__ = ["BackgroundDispatcher", "Scheduler", "run_dispatch_safely"]
