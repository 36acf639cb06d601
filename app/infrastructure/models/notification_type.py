"""SQLAlchemy model for the notification type catalog."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationTypeModel(Base):
    """Database representation of a notification type."""

    __tablename__ = "notification_types"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(20), nullable=False, index=True)
    default_enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    is_system = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    templates = relationship(
        "NotificationTemplateModel",
        back_populates="notification_type",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["NotificationTypeModel"]
