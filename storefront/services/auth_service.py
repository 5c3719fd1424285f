# storefront/services/auth_service.py
from datetime import datetime, timezone
import logging
import re

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.core.config import ACCESS_TOKEN_EXPIRE_HOURS
from storefront.core.exceptions import ConflictError, StoreError, ValidationError
from storefront.core.security import create_access_token, hash_password, verify_password
from storefront.models.user_models import User
from storefront.schemas.user_schemas import UserSignup

logger = logging.getLogger(__name__)

# At least 10 characters, 1 uppercase, 1 digit, 1 special character
PASSWORD_RE = re.compile(r"^(?=.*[A-Z])(?=.*[0-9])(?=.*[\W_]).{10,}$")
EMAIL_RE = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$")
PHONE_RE = re.compile(r"^(?:\+961|00961)[0-9]{8,}$")


def validate_password(password: str) -> None:
    if not PASSWORD_RE.match(password or ""):
        raise ValidationError(
            "password must contain at least 10 characters, 1 special character, 1 uppercase letter, and 1 number"
        )


def validate_signup(data: UserSignup) -> None:
    if not all([data.first_name, data.last_name, data.email, data.phone_number, data.location]):
        raise ValidationError("All fields are required")
    validate_password(data.password)
    if not EMAIL_RE.match(data.email):
        raise ValidationError("invalid email format")
    validate_phone(data.phone_number)


def validate_phone(phone_number: str) -> None:
    if not PHONE_RE.match(phone_number or ""):
        raise ValidationError("phone number must start with +961 or 00961 followed by 8 digits")


def issue_token(user: User) -> dict:
    access_token = create_access_token(user.id, user.token_version, role=user.role)
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "expires_in": ACCESS_TOKEN_EXPIRE_HOURS * 3600,
    }


async def signup_user(db: AsyncSession, data: UserSignup) -> dict:
    data.email = data.email.strip().lower()
    validate_signup(data)
    try:
        existing = await db.execute(select(User).where(User.email == data.email))
        if existing.scalars().first():
            raise ConflictError("User already exists")

        user = User(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            phone_number=data.phone_number,
            location=data.location,
            password_hash=hash_password(data.password),
            role="customer",
            last_login=datetime.now(timezone.utc),
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        logger.info("User created: %s", user.email)
        return issue_token(user)

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Could not create user: {e}")


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    user = result.scalars().first()
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive.")
    return user


async def login_user(db: AsyncSession, email: str, password: str) -> dict:
    user = await authenticate_user(db, email, password)
    user.last_login = datetime.now(timezone.utc)
    await db.commit()
    return issue_token(user)


async def logout_user(db: AsyncSession, user: User):
    """Invalidate every token issued so far by bumping the token version."""
    user.token_version += 1
    await db.commit()
    return {"msg": "Logged out successfully"}
