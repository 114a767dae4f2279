"""Read-only access to the user profile directory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from .models import Profile, Role
from .repository import ProfileRepository


@dataclass(slots=True)
class ProfileService:
    repository: ProfileRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ProfileService":
        from easyride.infrastructure.database.repositories.profile_repository import SqlProfileRepository

        return cls(SqlProfileRepository(session))

    async def get(self, user_id: str) -> Profile | None:
        return await self.repository.get(user_id)

    async def lookup_many(self, user_ids: Iterable[str]) -> dict[str, Profile]:
        unique_ids = sorted(set(user_ids))
        if not unique_ids:
            return {}
        profiles = await self.repository.get_many(unique_ids)
        return {profile.id: profile for profile in profiles}

    async def resolve_role(self, user_id: str, fallback: str | None = None) -> Role:
        """Role from the stored profile, else ``fallback`` (token metadata), else passenger."""
        profile = await self.get(user_id)
        if profile is not None and profile.role:
            return Role.normalize(profile.role)
        return Role.normalize(fallback)
