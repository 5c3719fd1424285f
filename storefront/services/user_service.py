# storefront/services/user_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from fastapi import HTTPException
from storefront.models.user_models import User
from storefront.core.security import hash_password
from storefront.schemas.user_schemas import UserUpdate
from storefront.services.auth_service import validate_password, validate_phone
from storefront.utils.activity_helpers import record_activity
from storefront.utils.check_roles import is_admin

# ---------------------------
# Allowed roles
# ---------------------------
ALLOWED_ROLES = {"admin", "customer"}


def ensure_self_or_admin(current_user, user_id: int):
    if current_user.id != user_id and not is_admin(current_user):
        raise HTTPException(status_code=403, detail="Permission denied")


# ---------------------------
# LIST ALL USERS
# ---------------------------
async def list_users(db: AsyncSession):
    """
    Return all users.
    """
    result = await db.execute(select(User).order_by(User.id))
    return result.scalars().all()


# ---------------------------
# GET USER BY ID
# ---------------------------
async def get_user_by_id(db: AsyncSession, user_id: int):
    """
    Fetch a single user by ID.
    """
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalars().first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# ---------------------------
# UPDATE USER
# ---------------------------
async def update_user(db: AsyncSession, user_id: int, user_data: UserUpdate, current_user):
    """
    Update a user and log a descriptive message.
    """
    target_user = await get_user_by_id(db, user_id)
    changes = []

    for field in ("first_name", "last_name", "location"):
        value = getattr(user_data, field)
        if value and value != getattr(target_user, field):
            setattr(target_user, field, value)
            changes.append(field)

    if user_data.phone_number:
        validate_phone(user_data.phone_number)
        target_user.phone_number = user_data.phone_number
        changes.append("phone_number")

    # Update password
    if user_data.password:
        validate_password(user_data.password)
        target_user.password_hash = hash_password(user_data.password)
        changes.append("password")

    # Update role
    if user_data.role:
        if not is_admin(current_user):
            raise HTTPException(status_code=403, detail="Only admins can change roles")
        if user_data.role not in ALLOWED_ROLES:
            raise HTTPException(status_code=400, detail=f"Role must be one of {sorted(ALLOWED_ROLES)}")
        changes.append(f"role to {user_data.role}")
        target_user.role = user_data.role

    if changes:
        await record_activity(
            db,
            current_user,
            f"{current_user.role.capitalize()} updated user {target_user.email}: {', '.join(changes)}"
        )

    await db.commit()
    await db.refresh(target_user)
    return target_user


# ---------------------------
# DELETE USER
# ---------------------------
async def delete_user(db: AsyncSession, user_id: int, current_user):
    """
    Soft-delete (deactivate) a user and log a descriptive message.
    """
    target_user = await get_user_by_id(db, user_id)
    target_user.is_active = False
    target_user.token_version += 1

    await record_activity(
        db,
        current_user,
        f"{current_user.role.capitalize()} deactivated {target_user.role} "
                f"with email {target_user.email}"
    )
    await db.commit()
    return target_user
