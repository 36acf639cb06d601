"""Tests for environment driven settings."""

import pytest
from pydantic import ValidationError

from app.config import Settings


def test_defaults_use_mailgun_and_ten_second_timeout():
    settings = Settings(_env_file=None)

    assert settings.email_provider == "mailgun"
    assert settings.delivery_timeout_seconds == 10
    assert settings.mailgun_base_url == "https://api.mailgun.net/v3"


def test_partial_mailgun_configuration_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, mailgun_api_key="key")


def test_mailgun_sender_must_be_an_email_address():
    with pytest.raises(ValidationError):
        Settings(
            _env_file=None,
            mailgun_api_key="key",
            mailgun_domain="mg.example.com",
            mailgun_from_email="not-an-address",
        )


def test_sendgrid_key_and_sender_go_together():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, sendgrid_api_key="SG.key")


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, delivery_timeout_seconds=0)


def test_values_are_read_from_environment(monkeypatch):
    monkeypatch.setenv("EMAIL_PROVIDER", "sendgrid")
    monkeypatch.setenv("SENDGRID_API_KEY", "SG.key")
    monkeypatch.setenv("SENDGRID_SENDER", "jobs@x.com")
    monkeypatch.setenv("DELIVERY_TIMEOUT_SECONDS", "2.5")

    settings = Settings(_env_file=None)

    assert settings.email_provider == "sendgrid"
    assert settings.sendgrid_sender == "jobs@x.com"
    assert settings.delivery_timeout_seconds == 2.5
