"""Read access to profile display metadata."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from rating_notifications.domain.entities import Profile
from rating_notifications.infrastructure.models import ProfileModel

from .errors import storage_errors


class ProfileRepository:
    """Look up the profiles shown as actors on notifications."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, profile_id: str) -> Profile | None:
        with storage_errors(self.session, "load profile"):
            model = self.session.get(ProfileModel, profile_id)
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, profile_ids: Iterable[str]) -> dict[str, Profile]:
        ids = {profile_id for profile_id in profile_ids if profile_id}
        if not ids:
            return {}
        with storage_errors(self.session, "load profiles"):
            models = (
                self.session.query(ProfileModel).filter(ProfileModel.id.in_(ids)).all()
            )
        return {model.id: self._to_entity(model) for model in models}

    @staticmethod
    def _to_entity(model: ProfileModel) -> Profile:
        return Profile(
            id=model.id,
            display_name=model.display_name,
            avatar_url=model.avatar_url,
        )


__all__ = ["ProfileRepository"]
