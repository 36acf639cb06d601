"""Read access to user profiles."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Profile
from app.infrastructure.models import ProfileModel


class ProfileRepository:
    """Look up the contact details of users by id."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> Profile | None:
        model = self.session.get(ProfileModel, user_id)
        return self._to_entity(model) if model else None

    def upsert(self, profile: Profile) -> Profile:
        model = self.session.get(ProfileModel, profile.id)
        if model is None:
            model = ProfileModel(id=profile.id)
        model.email = profile.email
        model.first_name = profile.first_name
        model.last_name = profile.last_name
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ProfileModel) -> Profile:
        return Profile(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
        )


__all__ = ["ProfileRepository"]
