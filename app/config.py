"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone (or UTC+HH:MM offset) used for persisted timestamps",
    )
    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    email_provider: Literal["mailgun", "sendgrid"] = Field(
        default="mailgun",
        description="Transactional email provider used by the delivery gateway",
    )
    mailgun_api_key: str | None = Field(
        default=None, description="Mailgun private API key"
    )
    mailgun_domain: str | None = Field(
        default=None, description="Mailgun sending domain"
    )
    mailgun_from_email: str | None = Field(
        default=None,
        description="Address that will appear as the sender of Mailgun messages",
    )
    mailgun_base_url: str = Field(
        default="https://api.mailgun.net/v3",
        description="Base URL of the Mailgun REST API (use the EU endpoint if needed)",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of SendGrid messages",
        min_length=3,
    )
    delivery_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to each outbound call to the email provider",
        gt=0,
    )
    site_url: str = Field(
        default="http://localhost:5173",
        description="Public URL of the job board used to build links in notifications",
    )
    admin_notification_email: str = Field(
        default="admin@example.com",
        description="Recipient of admin-category notifications",
    )

    @model_validator(mode="after")
    def _validate_email_providers(self) -> "Settings":
        mailgun_values = (
            self.mailgun_api_key,
            self.mailgun_domain,
            self.mailgun_from_email,
        )
        if any(mailgun_values) and not all(mailgun_values):
            raise ValueError(
                "MAILGUN_API_KEY, MAILGUN_DOMAIN and MAILGUN_FROM_EMAIL must all be provided "
                "to enable Mailgun delivery"
            )
        if self.mailgun_from_email and "@" not in self.mailgun_from_email:
            raise ValueError("MAILGUN_FROM_EMAIL must be a valid email address")
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
