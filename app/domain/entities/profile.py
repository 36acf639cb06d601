"""Domain entity representing the public profile of an authenticated user."""

from dataclasses import dataclass


@dataclass
class Profile:
    """Contact details of a user registered with the external auth provider."""

    id: str
    email: str | None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


__all__ = ["Profile"]
