"""Bearer token verification and role guards.

Tokens are issued by the external identity provider and signed with the
shared secret from ``settings.security``. ``sub`` carries the user id and
``user_metadata.role`` an optional role hint; the stored profile role
takes precedence over the hint.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from easyride.core.config import get_settings
from easyride.interfaces.http.deps.database import get_db_session
from easyride.modules.profiles import ProfileService
from easyride.schemas import CurrentUser, TokenData

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

INVALID_TOKEN = "Invalid or expired token"


def create_access_token(
    user_id: str,
    *,
    email: Optional[str] = None,
    role: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a token with the same claim layout the identity provider uses."""
    settings = get_settings()
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": user_id,
        "email": email,
        "user_metadata": {"role": role} if role else {},
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    if settings.security.audience:
        payload["aud"] = settings.security.audience
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenData:
    settings = get_settings()
    options = {"verify_aud": settings.security.audience is not None}
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            audience=settings.security.audience,
            options=options,
        )
    except JWTError as exc:
        logger.warning("Rejected bearer token: %s", exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN) from exc

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN)
    metadata = payload.get("user_metadata") or {}
    return TokenData(user_id=user_id, email=payload.get("email"), role=metadata.get("role"))


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db_session),
) -> CurrentUser:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
        )
    token_data = decode_access_token(credentials.credentials)
    role = await ProfileService.with_session(db).resolve_role(token_data.user_id, token_data.role)
    return CurrentUser(id=token_data.user_id, email=token_data.email, role=role.value)


async def get_current_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        logger.warning("User %s with role %s denied admin access", user.id, user.role)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return user
