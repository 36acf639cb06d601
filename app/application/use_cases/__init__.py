"""Aggregate application use cases."""

from .notifications import build_orchestrator, dispatch_notification, send_generic_email

__all__ = [
    "build_orchestrator",
    "dispatch_notification",
    "send_generic_email",
]
