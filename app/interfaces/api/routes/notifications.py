"""Dispatch trigger and generic email endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    dispatch_notification,
    send_generic_email,
)
from app.domain.entities import Recipient
from app.domain.exceptions import (
    DeliveryError,
    NoTemplateError,
    NotificationTypeNotFoundError,
    RecipientUnresolvableError,
)
from app.infrastructure.database import get_db
from app.infrastructure.email import DeliveryGateway
from app.interfaces.api.dependencies import get_delivery_gateway
from app.interfaces.api.schemas import (
    DispatchRequestBody,
    DispatchResponse,
    SendEmailRequest,
    SendEmailResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/notifications/dispatch",
    response_model=DispatchResponse,
    response_model_exclude_none=True,
    responses={400: {}, 404: {}, 500: {}},
)
def dispatch(
    payload: DispatchRequestBody,
    db: Session = Depends(get_db),
    gateway: DeliveryGateway = Depends(get_delivery_gateway),
) -> DispatchResponse | JSONResponse:
    """Render and deliver one notification to one recipient."""

    if not payload.notification_type or not (
        payload.recipient_user_id or payload.recipient_email
    ):
        return _error(status.HTTP_400_BAD_REQUEST, "Missing required fields")

    try:
        result = dispatch_notification(
            db,
            gateway,
            notification_type_key=payload.notification_type,
            recipient=Recipient(
                user_id=payload.recipient_user_id, email=payload.recipient_email
            ),
            context=payload.context,
        )
    except NotificationTypeNotFoundError:
        logger.error("Notification type not found: %s", payload.notification_type)
        return _error(status.HTTP_404_NOT_FOUND, "Notification type not found")
    except RecipientUnresolvableError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except (NoTemplateError, DeliveryError) as exc:
        logger.error("Error processing notification: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    if result.skipped:
        return DispatchResponse(success=True, skipped=True, reason=result.reason)
    return DispatchResponse(success=True, message_id=result.message_id)


@router.post(
    "/emails/send",
    response_model=SendEmailResponse,
    response_model_exclude_none=True,
    responses={400: {}, 500: {}},
)
def send_email(
    payload: SendEmailRequest,
    db: Session = Depends(get_db),
    gateway: DeliveryGateway = Depends(get_delivery_gateway),
) -> SendEmailResponse | JSONResponse:
    """Send an ad-hoc email through the configured provider."""

    if not payload.to or not payload.subject or not payload.html:
        return _error(
            status.HTTP_400_BAD_REQUEST, "Missing required fields: to, subject, html"
        )

    try:
        result = send_generic_email(
            db,
            gateway,
            to=payload.to,
            subject=payload.subject,
            html=payload.html,
            text=payload.text,
            reply_to=payload.reply_to,
        )
    except DeliveryError as exc:
        logger.error("Error sending email: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    return SendEmailResponse(success=True, message_id=result.message_id)


__all__ = ["router"]
