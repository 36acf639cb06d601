"""SQLAlchemy model for notification templates."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationTemplateModel(Base):
    """Database representation of one template tier for a notification type."""

    __tablename__ = "notification_templates"
    __table_args__ = (
        UniqueConstraint(
            "notification_type_id",
            "template_type",
            name="uq_notification_templates_type_tier",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    notification_type_id = Column(
        Integer,
        ForeignKey("notification_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    template_type = Column(String(30), nullable=False)
    subject = Column(String(255), nullable=False)
    body_html = Column(Text, nullable=False)
    body_text = Column(Text, nullable=True)
    variables = Column(JSON, nullable=False, default=list)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    notification_type = relationship("NotificationTypeModel", back_populates="templates")


__all__ = ["NotificationTemplateModel"]
