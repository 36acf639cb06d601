"""Domain entity representing a stored notification template."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

TEMPLATE_TIER_SYSTEM_DEFAULT: Final[str] = "system_default"
TEMPLATE_TIER_ADMIN_GLOBAL: Final[str] = "admin_global"

# Highest precedence first.
TEMPLATE_TIER_PRIORITY: Final[tuple[str, ...]] = (
    TEMPLATE_TIER_ADMIN_GLOBAL,
    TEMPLATE_TIER_SYSTEM_DEFAULT,
)


@dataclass
class NotificationTemplate:
    """Subject and body used to render one notification type at one tier."""

    id: int | None
    notification_type_id: int
    template_type: str
    subject: str
    body_html: str
    body_text: str | None = None
    variables: list[str] = field(default_factory=list)
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "NotificationTemplate",
    "TEMPLATE_TIER_ADMIN_GLOBAL",
    "TEMPLATE_TIER_PRIORITY",
    "TEMPLATE_TIER_SYSTEM_DEFAULT",
]
