"""SQLAlchemy model for per-user notification preferences."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class UserNotificationPreferenceModel(Base):
    """Database representation of a user's explicit preference."""

    __tablename__ = "user_notification_preferences"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "notification_type_id",
            name="uq_user_notification_preferences_user_type",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    notification_type_id = Column(
        Integer,
        ForeignKey("notification_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_enabled = Column(Boolean, nullable=False)
    custom_template_subject = Column(String(255), nullable=True)
    custom_template_body = Column(Text, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["UserNotificationPreferenceModel"]
