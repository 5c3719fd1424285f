# storefront/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from storefront.core.db import get_db
from storefront.schemas.user_schemas import UserLogin, UserSignup, TokenResponse, MessageResponse
from storefront.services.auth_service import signup_user, login_user, logout_user
from storefront.utils.get_user import get_current_user

router = APIRouter(prefix="/auth", tags=["Auth"])

@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(data: UserSignup, db: AsyncSession = Depends(get_db)):
    return await signup_user(db, data)

@router.post("/login", response_model=TokenResponse)
async def login(data: UserLogin, db: AsyncSession = Depends(get_db)):
    return await login_user(db, data.email, data.password)

@router.post("/logout", response_model=MessageResponse)
async def logout(db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    """
    Logs out the user by invalidating every token issued to them.
    """
    return await logout_user(db, current_user)
