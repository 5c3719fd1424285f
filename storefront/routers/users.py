# storefront/routers/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from storefront.core.db import get_db
from storefront.schemas.user_schemas import (
    UserUpdate, UserResponse, UsersListResponse, MessageResponse
)
from storefront.utils.get_user import get_current_user
from storefront.utils.check_roles import admin_only
from storefront.services.user_service import (
    list_users, get_user_by_id, update_user, delete_user, ensure_self_or_admin
)

router = APIRouter(prefix="/users", tags=["Users CRUD"])

# ---------------------------
# CURRENT USER
# ---------------------------
@router.get("/me", response_model=UserResponse)
async def get_me_route(current_user = Depends(get_current_user)):
    return {"msg": "User fetched successfully.", "data": current_user}


# ---------------------------
# LIST ALL USERS
# ---------------------------
@router.get("", response_model=UsersListResponse)
@admin_only
async def list_users_route(db: AsyncSession = Depends(get_db), _user = Depends(get_current_user)):
    users = await list_users(db)
    return {"msg": f"{len(users)} users fetched successfully.", "data": users}


# ---------------------------
# GET SINGLE USER
# ---------------------------
@router.get("/{user_id}", response_model=UserResponse)
async def get_user_route(user_id: int, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    ensure_self_or_admin(current_user, user_id)
    target_user = await get_user_by_id(db, user_id)
    return {"msg": f"User with ID {user_id} fetched successfully.", "data": target_user}


# ---------------------------
# UPDATE USER
# ---------------------------
@router.put("/{user_id}", response_model=UserResponse)
async def update_user_route(user_id: int, user_data: UserUpdate, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    ensure_self_or_admin(current_user, user_id)
    updated_user = await update_user(db, user_id, user_data, current_user)
    return {"msg": f"User '{updated_user.email}' updated successfully.", "data": updated_user}


# ---------------------------
# DELETE USER
# ---------------------------
@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user_route(user_id: int, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    ensure_self_or_admin(current_user, user_id)
    deleted_user = await delete_user(db, user_id, current_user)
    return {"msg": f"User '{deleted_user.email}' deactivated successfully."}
