"""Delivery gateways that hand rendered notifications to an email provider."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

import requests
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import Settings, get_settings
from app.domain.entities import DeliveryReceipt
from app.domain.exceptions import DeliveryError

logger = logging.getLogger(__name__)


class DeliveryGateway(Protocol):
    """Send one message and return the provider receipt or raise ``DeliveryError``."""

    def send(
        self,
        to: str | Sequence[str],
        subject: str,
        body_html: str,
        body_text: str | None = None,
        reply_to: str | None = None,
    ) -> DeliveryReceipt:
        ...


def _normalize_recipients(to: str | Sequence[str]) -> list[str]:
    if isinstance(to, str):
        recipients = [to]
    else:
        recipients = list(to)
    recipients = [address.strip() for address in recipients if address and address.strip()]
    if not recipients:
        raise DeliveryError("At least one recipient address is required")
    return recipients


def _extract_provider_error_details(body: Any) -> str | None:
    """Return a human readable description for a provider error payload.

    Mailgun answers ``{"message": ...}`` while SendGrid answers
    ``{"errors": [{"message": ..., "help": ...}]}``; anything else is echoed.
    """

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        message = parsed.get("message")
        if isinstance(message, str) and message:
            return message
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                item_message = item.get("message")
                help_link = item.get("help")
                if item_message and help_link:
                    messages.append(f"{item_message} (help: {help_link})")
                elif item_message:
                    messages.append(str(item_message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return str(parsed)


class MailgunGateway:
    """Deliver messages through the Mailgun ``/messages`` endpoint."""

    def __init__(
        self,
        *,
        api_key: str | None,
        domain: str | None,
        from_email: str | None,
        base_url: str = "https://api.mailgun.net/v3",
        timeout: float | None = None,
        http: Any = None,
    ) -> None:
        self.api_key = api_key
        self.domain = domain
        self.from_email = from_email
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http or requests

    @classmethod
    def from_settings(cls, settings: Settings) -> "MailgunGateway":
        return cls(
            api_key=settings.mailgun_api_key,
            domain=settings.mailgun_domain,
            from_email=settings.mailgun_from_email,
            base_url=settings.mailgun_base_url,
            timeout=settings.delivery_timeout_seconds,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.domain}/messages"

    def build_form(
        self,
        to: str | Sequence[str],
        subject: str,
        body_html: str,
        body_text: str | None = None,
        reply_to: str | None = None,
    ) -> list[tuple[str, str]]:
        """Return the form fields, repeating ``to`` once per recipient."""

        form: list[tuple[str, str]] = [("from", self.from_email or "")]
        form.extend(("to", address) for address in _normalize_recipients(to))
        form.append(("subject", subject))
        form.append(("html", body_html))
        if body_text:
            form.append(("text", body_text))
        if reply_to:
            form.append(("h:Reply-To", reply_to))
        return form

    def send(
        self,
        to: str | Sequence[str],
        subject: str,
        body_html: str,
        body_text: str | None = None,
        reply_to: str | None = None,
    ) -> DeliveryReceipt:
        if not (self.api_key and self.domain and self.from_email):
            raise DeliveryError("Mailgun configuration missing")

        form = self.build_form(to, subject, body_html, body_text, reply_to)
        try:
            response = self._http.post(
                self.endpoint,
                auth=("api", self.api_key),
                data=form,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Mailgun request failed: %s", exc)
            raise DeliveryError(f"Mailgun request failed: {exc}") from exc

        status_code = response.status_code
        if not 200 <= status_code < 300:
            details = _extract_provider_error_details(response.text)
            logger.error(
                "Mailgun API responded with status %s: %s", status_code, details
            )
            raise DeliveryError(details or "Failed to send email", status_code=status_code)

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        message_id = payload.get("id") if isinstance(payload, dict) else None
        logger.info("Email sent through Mailgun with id %s", message_id)
        return DeliveryReceipt(message_id=message_id)


class SendGridGateway:
    """Deliver messages through the SendGrid v3 REST API."""

    def __init__(
        self,
        *,
        api_key: str | None,
        sender: str | None,
        client_factory: Any = None,
    ) -> None:
        self.api_key = api_key
        self.sender = sender
        self._client_factory = client_factory or SendGridAPIClient

    @classmethod
    def from_settings(cls, settings: Settings) -> "SendGridGateway":
        return cls(api_key=settings.sendgrid_api_key, sender=settings.sendgrid_sender)

    def send(
        self,
        to: str | Sequence[str],
        subject: str,
        body_html: str,
        body_text: str | None = None,
        reply_to: str | None = None,
    ) -> DeliveryReceipt:
        if not (self.api_key and self.sender):
            raise DeliveryError("SendGrid configuration missing")

        message = Mail(
            from_email=self.sender,
            to_emails=_normalize_recipients(to),
            subject=subject,
            html_content=body_html,
            plain_text_content=body_text,
        )
        if reply_to:
            message.reply_to = reply_to

        try:
            response = self._client_factory(self.api_key).send(message)
        except Exception as exc:
            status_code = getattr(exc, "status_code", None)
            details = _extract_provider_error_details(getattr(exc, "body", None))
            logger.error(
                "SendGrid API request failed with status %s: %s",
                status_code,
                details or exc,
            )
            raise DeliveryError(details or str(exc), status_code=status_code) from exc

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            details = _extract_provider_error_details(getattr(response, "body", None))
            logger.error("SendGrid API responded with status %s: %s", status_code, details)
            raise DeliveryError(details or "Failed to send email", status_code=status_code)

        headers = getattr(response, "headers", None) or {}
        message_id = headers.get("X-Message-Id") if hasattr(headers, "get") else None
        return DeliveryReceipt(message_id=message_id)


def build_delivery_gateway(settings: Settings | None = None) -> DeliveryGateway:
    """Return the gateway for the configured ``EMAIL_PROVIDER``."""

    settings = settings or get_settings()
    if settings.email_provider == "sendgrid":
        return SendGridGateway.from_settings(settings)
    return MailgunGateway.from_settings(settings)


__all__ = [
    "DeliveryGateway",
    "MailgunGateway",
    "SendGridGateway",
    "build_delivery_gateway",
]
