"""SQLAlchemy implementation of the profile repository."""

from __future__ import annotations

from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from easyride.db.models import Profile as ProfileModel
from easyride.modules.profiles.models import Profile


class SqlProfileRepository:
    """Profile lookups backed by the ``profiles`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str) -> Profile | None:
        stmt = select(ProfileModel).where(ProfileModel.id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def get_many(self, user_ids: Iterable[str]) -> Sequence[Profile]:
        ids = list(user_ids)
        if not ids:
            return []
        stmt = select(ProfileModel).where(ProfileModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: ProfileModel) -> Profile:
        return Profile(
            id=str(model.id),
            full_name=model.full_name,
            phone_number=model.phone_number,
            email=model.email,
            role=model.role,
        )
