# storefront/schemas/user_schemas.py
from pydantic import BaseModel
from typing import Literal, Optional, List
from datetime import datetime

class UserLogin(BaseModel):
    email: str
    password: str

class UserSignup(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone_number: str
    location: str
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int

class UserUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    location: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None

class UserOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str
    location: str
    role: str
    is_active: bool
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True

class MessageResponse(BaseModel):
    msg: str

# Unified structure for all endpoints
class UserResponse(BaseModel):
    msg: str
    data: Optional[UserOut] = None

class UsersListResponse(BaseModel):
    msg: str
    data: List[UserOut]
