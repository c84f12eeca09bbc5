from pydantic import BaseModel, EmailStr, Field, field_validator
from enum import Enum
from typing import Optional
from datetime import datetime
from uuid import UUID

PHONE_PATTERN = r"^\+?[1-9]\d{0,15}$"


class Role(str, Enum):
    user = "user"
    admin = "admin"


class UserBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN, description="Digits with an optional leading +")

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()

    class Config:
        str_strip_whitespace = True


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)


class UserOut(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str
    role: Role
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    """Fields an admin may change on any account"""
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    role: Optional[Role] = None
    is_active: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower() if v is not None else v

    class Config:
        str_strip_whitespace = True


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own account"""
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    password: Optional[str] = Field(None, min_length=6)

    class Config:
        str_strip_whitespace = True


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    user: UserOut


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class RefreshTokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str


class UserStats(BaseModel):
    total_users: int
    active_users: int
    admin_users: int
    regular_users: int
    new_users: int
