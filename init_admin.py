"""
Seed an administrator profile and print a development bearer token.

Usage: python init_admin.py <user-id> [email] [full name]
"""
import asyncio
import sys

from sqlalchemy import select

from easyride.core.security import create_access_token
from easyride.db.models import Profile
from easyride.infrastructure.database.session import dispose_engine, get_session, init_db
from easyride.modules.profiles import Role


async def create_admin_profile(user_id: str, email: str | None, full_name: str | None) -> None:
    await init_db()

    async for db in get_session():
        result = await db.execute(select(Profile).where(Profile.id == user_id))
        profile = result.scalar_one_or_none()

        if profile is None:
            db.add(Profile(id=user_id, email=email, full_name=full_name, role=Role.ADMIN.value))
            print(f"Created admin profile {user_id}")
        elif profile.role != Role.ADMIN.value:
            profile.role = Role.ADMIN.value
            print(f"Promoted profile {user_id} to admin")
        else:
            print(f"Profile {user_id} is already an admin")
        await db.commit()

    await dispose_engine()

    token = create_access_token(user_id, email=email, role=Role.ADMIN.value)
    print("=" * 50)
    print("Development bearer token:")
    print(token)
    print("=" * 50)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__.strip())
        sys.exit(1)
    args = sys.argv[1:] + [None, None]
    asyncio.run(create_admin_profile(args[0], args[1], args[2]))
