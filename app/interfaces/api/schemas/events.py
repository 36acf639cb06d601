"""Pydantic models for the business event hooks."""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field


class BusinessStatusEvent(BaseModel):
    business_name: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    status: Literal["approved", "rejected", "pending", "draft"]


class ApplicationSubmittedEvent(BaseModel):
    business_owner_id: str = Field(..., min_length=1)
    business_name: str
    job_title: str | None = None
    applicant_email: str = Field(..., min_length=3)
    applicant_first_name: str | None = None
    applicant_last_name: str | None = None
    applied_on: date | None = None


class ApplicationStatusEvent(BaseModel):
    applicant_id: str = Field(..., min_length=1)
    status: str
    job_id: str | None = None
    job_title: str | None = None
    business_name: str | None = None
    applicant_first_name: str | None = None
    applicant_last_name: str | None = None


class BusinessRegisteredEvent(BaseModel):
    business_name: str = Field(..., min_length=1)
    owner_email: str | None = None
    owner_first_name: str | None = None
    owner_last_name: str | None = None
    industry: str | None = None


class SubscriberItem(BaseModel):
    user_id: str | None = None
    email: str | None = None


class JobPostedEvent(BaseModel):
    job_id: str = Field(..., min_length=1)
    job_title: str = Field(..., min_length=1)
    business_name: str | None = None
    location: str | None = None
    job_type: str | None = None
    description: str | None = None
    subscribers: list[SubscriberItem] = Field(default_factory=list)


class EventAccepted(BaseModel):
    accepted: bool = True
    scheduled: int = 0


__all__ = [
    "ApplicationStatusEvent",
    "ApplicationSubmittedEvent",
    "BusinessRegisteredEvent",
    "BusinessStatusEvent",
    "EventAccepted",
    "JobPostedEvent",
    "SubscriberItem",
]
