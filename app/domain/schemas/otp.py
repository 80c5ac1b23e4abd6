"""Pydantic schemas for the OTP registration flow."""

from typing import Optional

from pydantic import BaseModel


class SendCodeRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class VerifyCodeRequest(BaseModel):
    email: Optional[str] = None
    otp: Optional[str] = None
