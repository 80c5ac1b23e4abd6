"""Auth API routes — legacy register, demo OTP, login, profile."""

from fastapi import APIRouter, Depends

from app.application.services.auth_service import (
    authenticate_user,
    get_profile,
    register_user,
    verify_legacy_otp,
)
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import (
    LegacyOtpRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    UserRead,
)
from app.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/register", response_model=MessageResponse)
def register(body: RegisterRequest, repo: UserRepository = Depends(get_user_repository)):
    register_user(repo, body)
    return MessageResponse(message="Registration successful! Please verify with OTP.")


@router.post("/verify-otp", response_model=MessageResponse)
def verify_otp(body: LegacyOtpRequest):
    """Demo activation step for the legacy register path (fixed code)."""
    verify_legacy_otp(body)
    return MessageResponse(message="Account activated successfully!")


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, repo: UserRepository = Depends(get_user_repository)):
    user = authenticate_user(repo, body)
    return LoginResponse(message="Login successful!", user=UserRead.model_validate(user))


@router.get("/profile/{user_id}", response_model=ProfileResponse)
def profile(user_id: str, repo: UserRepository = Depends(get_user_repository)):
    user = get_profile(repo, user_id)
    return ProfileResponse(user=UserRead.model_validate(user))
