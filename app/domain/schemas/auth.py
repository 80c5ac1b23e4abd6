"""Pydantic schemas for User and Auth.

Request fields are optional on purpose: absent or blank values are reported by
the services as MissingFieldError (400) instead of a framework 422.
"""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class RegisterRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LegacyOtpRequest(BaseModel):
    otp: Optional[str] = None


class UserRead(BaseModel):
    """Public view of a user. Never carries the password."""
    id: int
    username: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
    success: bool = True


class LoginResponse(MessageResponse):
    user: UserRead


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserRead
