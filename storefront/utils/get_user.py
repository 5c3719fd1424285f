# storefront/utils/get_user.py
from fastapi import Depends, HTTPException, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.user_models import User
from storefront.core.db import get_db
from storefront.core.security import decode_token


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header missing")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Invalid authorization header")
    return token.strip()


async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to an active user. A token minted before the
    user's last logout carries a stale version and is refused.
    """
    try:
        claims = decode_token(_bearer_token(authorization))
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user = await db.get(User, claims.user_id)
    if not user or user.token_version != claims.token_version:
        raise HTTPException(status_code=401, detail="Token invalidated. Please log in again.")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="User account is inactive.")

    # Plain id only: the ORM instance is detached once the request session closes
    request.state.user_id = user.id
    return user
