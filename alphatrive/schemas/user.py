from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from .base import CamelModel


def clean_username(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("username must not be blank")
    return v


class RegisterRequest(CamelModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v):
        return clean_username(v)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class ProfileUpdateRequest(CamelModel):
    """Only fields present in the body are written."""
    username: Optional[str] = Field(default=None, min_length=1, max_length=50)
    bio: Optional[str] = None
    profile_picture: Optional[str] = Field(default=None, max_length=512)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v):
        return clean_username(v)


class UserBrief(CamelModel):
    id: str
    username: Optional[str] = None


class LoginUser(CamelModel):
    id: str
    username: str
    email: str


class LoginResponse(CamelModel):
    token: str
    user: LoginUser


class RegisteredUser(CamelModel):
    id: str
    username: str
    email: str
    bio: str
    profile_picture: str
    created_at: datetime


class RegisterResponse(CamelModel):
    success: bool = True
    message: str
    user_id: str
    registered_user: RegisteredUser


class ProfileResponse(CamelModel):
    id: str
    username: str
    bio: str
    profile_picture: str
