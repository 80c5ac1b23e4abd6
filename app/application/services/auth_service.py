"""Auth service — legacy registration, login and profile lookup.

Passwords are stored and compared exactly as the client sends them.
"""

from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.application.services.validation import clean, require_fields
from app.config import get_settings
from app.core.exceptions import (
    CodeMismatchError,
    DuplicateAccountError,
    InvalidCredentialsError,
    NotFoundError,
    StoreFailureError,
)
from app.domain.models.user import DEFAULT_ROLE, User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import LegacyOtpRequest, LoginRequest, RegisterRequest

logger = structlog.get_logger(__name__)


def _store_failure(e: SQLAlchemyError) -> StoreFailureError:
    return StoreFailureError("Server error: " + str(e), details={"error": str(e)})


def register_user(repo: UserRepository, body: RegisterRequest) -> User:
    """Create a customer account directly, without email verification."""
    require_fields("Username and password are required", username=body.username, password=body.password)
    try:
        user = repo.create({
            "username": clean(body.username),
            "password": body.password,
            "full_name": clean(body.full_name),
            "phone": clean(body.phone),
            "role": DEFAULT_ROLE,
        })
    except IntegrityError as e:
        raise DuplicateAccountError("This username is already taken") from e
    except SQLAlchemyError as e:
        logger.error("Register failed", username=body.username, error=str(e))
        raise _store_failure(e) from e
    logger.info("Account registered", user_id=user.id, username=user.username)
    return user


def verify_legacy_otp(body: LegacyOtpRequest) -> None:
    """Accept only the fixed demo code."""
    expected = get_settings().LEGACY_OTP_CODE
    if not body.otp or body.otp.strip() != expected:
        raise CodeMismatchError(f"Wrong OTP! (Hint: enter {expected})")


def authenticate_user(repo: UserRepository, body: LoginRequest) -> User:
    username: Optional[str] = clean(body.username)
    if not username or not body.password:
        raise InvalidCredentialsError()
    try:
        user = repo.get_by_credentials(username, body.password)
    except SQLAlchemyError as e:
        logger.error("Login query failed", username=username, error=str(e))
        raise _store_failure(e) from e
    if user is None:
        raise InvalidCredentialsError()
    return user


def get_profile(repo: UserRepository, user_id: str) -> User:
    """Look up a user by the id in the URL; a non-numeric id matches nobody."""
    try:
        numeric_id = int(str(user_id).strip())
    except ValueError:
        raise NotFoundError("User not found")
    try:
        user = repo.get_by_id(numeric_id)
    except SQLAlchemyError as e:
        logger.error("Profile query failed", user_id=user_id, error=str(e))
        raise _store_failure(e) from e
    if user is None:
        raise NotFoundError("User not found")
    return user
