from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from easyride.core.security import create_access_token
from easyride.db import models
from easyride.infrastructure.database.base import Base
from easyride.infrastructure.database.session import build_engine
from easyride.interfaces.http.deps import get_db_session
from easyride.main import app as fastapi_app

ADMIN_ID = "00000000-0000-0000-0000-00000000a001"
PASSENGER_ID = "00000000-0000-0000-0000-00000000b001"


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'wallet.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seed_profiles(session_factory) -> None:
    async with session_factory() as session:
        session.add_all(
            [
                models.Profile(id=ADMIN_ID, full_name="Transport Office", email="admin@easyride.test", role="admin"),
                models.Profile(
                    id=PASSENGER_ID,
                    full_name="Nusrat Jahan",
                    phone_number="01812345678",
                    email="nusrat@easyride.test",
                    role="student",
                ),
            ]
        )
        await session.commit()


@pytest_asyncio.fixture
async def client(session_factory, seed_profiles) -> AsyncIterator[httpx.AsyncClient]:
    async def override_db_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db_session] = override_db_session
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
    fastapi_app.dependency_overrides.clear()


def bearer(user_id: str, role: str | None = None) -> dict[str, str]:
    token = create_access_token(user_id, email=f"{user_id}@easyride.test", role=role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return bearer(ADMIN_ID)


@pytest.fixture
def passenger_headers() -> dict[str, str]:
    return bearer(PASSENGER_ID)
