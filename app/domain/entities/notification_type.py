"""Domain entity describing a kind of notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

CATEGORY_BUSINESS: Final[str] = "business"
CATEGORY_APPLICANT: Final[str] = "applicant"
CATEGORY_ADMIN: Final[str] = "admin"
CATEGORY_SYSTEM: Final[str] = "system"

NOTIFICATION_CATEGORIES: Final[tuple[str, ...]] = (
    CATEGORY_BUSINESS,
    CATEGORY_APPLICANT,
    CATEGORY_ADMIN,
    CATEGORY_SYSTEM,
)


@dataclass
class NotificationType:
    """Symbolic category of event that callers reference by ``key``."""

    id: int | None
    key: str
    name: str
    description: str | None
    category: str
    default_enabled: bool
    is_system: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "CATEGORY_ADMIN",
    "CATEGORY_APPLICANT",
    "CATEGORY_BUSINESS",
    "CATEGORY_SYSTEM",
    "NOTIFICATION_CATEGORIES",
    "NotificationType",
]
