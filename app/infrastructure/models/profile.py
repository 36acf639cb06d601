"""SQLAlchemy model for user profiles."""

from sqlalchemy import Column, String

from app.infrastructure.database import Base


class ProfileModel(Base):
    """Contact data mirrored from the authentication provider."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)
    email = Column(String(320), nullable=True, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)


__all__ = ["ProfileModel"]
