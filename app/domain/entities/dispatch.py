"""Value objects exchanged with the dispatch pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

DISPATCH_STATUS_SENT: Final[str] = "sent"
DISPATCH_STATUS_SKIPPED: Final[str] = "skipped"

SKIP_REASON_PREFERENCE_DISABLED: Final[str] = "user_preference_disabled"
SKIP_REASON_NO_RECIPIENT: Final[str] = "no_recipient"


@dataclass(frozen=True)
class Recipient:
    """Target of a dispatch, identified by user id, raw email or both."""

    user_id: str | None = None
    email: str | None = None

    def is_empty(self) -> bool:
        return not (self.user_id or self.email)


@dataclass(frozen=True)
class DispatchRequest:
    """Everything needed to run one dispatch outside the request scope."""

    notification_type_key: str
    recipient: Recipient
    context: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RenderedMessage:
    """Subject and bodies produced by rendering a template."""

    subject: str
    body_html: str
    body_text: str | None = None


@dataclass(frozen=True)
class DeliveryReceipt:
    """Acknowledgement returned by the email provider."""

    message_id: str | None


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a dispatch that did not raise."""

    status: str
    message_id: str | None = None
    reason: str | None = None
    log_id: int | None = None

    @property
    def skipped(self) -> bool:
        return self.status == DISPATCH_STATUS_SKIPPED

    @property
    def sent(self) -> bool:
        return self.status == DISPATCH_STATUS_SENT


__all__ = [
    "DISPATCH_STATUS_SENT",
    "DISPATCH_STATUS_SKIPPED",
    "DeliveryReceipt",
    "DispatchRequest",
    "DispatchResult",
    "Recipient",
    "RenderedMessage",
    "SKIP_REASON_NO_RECIPIENT",
    "SKIP_REASON_PREFERENCE_DISABLED",
]
