"""Errors raised by the notification pipeline."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for notification pipeline failures."""


class NotificationTypeNotFoundError(NotificationError, LookupError):
    """Raised when a caller references an unregistered notification type key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Notification type not found: {key}")
        self.key = key


class RecipientUnresolvableError(NotificationError):
    """Raised when neither the explicit email nor the user profile yields an address."""

    def __init__(self, user_id: str | None = None) -> None:
        message = "Could not determine recipient email"
        if user_id:
            message = f"{message} for user {user_id}"
        super().__init__(message)
        self.user_id = user_id


class NoTemplateError(NotificationError):
    """Raised when no active template exists for a resolved notification type."""

    def __init__(self, key: str) -> None:
        super().__init__(f"No template found for notification type: {key}")
        self.key = key


class DeliveryError(NotificationError):
    """Raised when the email provider rejects a message or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidPreferenceError(NotificationError, ValueError):
    """Raised when a user tries to opt out of a system notification type."""


__all__ = [
    "DeliveryError",
    "InvalidPreferenceError",
    "NoTemplateError",
    "NotificationError",
    "NotificationTypeNotFoundError",
    "RecipientUnresolvableError",
]
