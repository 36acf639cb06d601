"""SQLAlchemy model for the notification audit log."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationLogModel(Base):
    """Append-only record of dispatch attempts.

    ``notification_type_key`` is stored as plain text rather than a foreign key
    so entries stay readable after a type is renamed or removed.
    """

    __tablename__ = "notification_logs"

    id = Column(Integer, primary_key=True, index=True)
    notification_type_key = Column(String(100), nullable=False, index=True)
    recipient_email = Column(String(320), nullable=False)
    recipient_user_id = Column(String(255), nullable=True, index=True)
    subject = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, index=True)
    error_message = Column(Text, nullable=True)
    # ``metadata`` is reserved by the declarative API.
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )


__all__ = ["NotificationLogModel"]
