"""Repository protocol for user profiles."""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .models import Profile


class ProfileRepository(Protocol):
    async def get(self, user_id: str) -> Profile | None:
        ...

    async def get_many(self, user_ids: Iterable[str]) -> Sequence[Profile]:
        ...
