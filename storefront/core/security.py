# storefront/core/security.py
"""Password hashing and the bearer tokens handed to storefront clients."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from storefront.core.config import JWT_SECRET, JWT_ALGORITHM, JWT_ISSUER, ACCESS_TOKEN_EXPIRE_HOURS

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_TTL = timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    token_version: int
    role: Optional[str] = None


def create_access_token(user_id: int, token_version: int, role: Optional[str] = None, ttl: timedelta = TOKEN_TTL) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "role": role,
        # Bumped on logout/deactivation; older tokens stop matching
        "ver": token_version,
        "iss": JWT_ISSUER,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> TokenClaims:
    """Raises ValueError on a bad signature, issuer, expiry or payload."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM], issuer=JWT_ISSUER)
        return TokenClaims(
            user_id=int(payload["sub"]),
            token_version=int(payload["ver"]),
            role=payload.get("role"),
        )
    except (JWTError, KeyError, TypeError, ValueError):
        raise ValueError("Invalid or expired token")
