"""Transaction boundary used by services that span several repositories."""

from __future__ import annotations

from typing import Protocol


class UnitOfWork(Protocol):
    """Anything with ``commit``/``rollback``; an ``AsyncSession`` satisfies it."""

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
