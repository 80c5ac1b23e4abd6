"""OTP registration service — stage a sign-up, email the code, verify it.

Flow per email:
    absent -> staged -> verified (user created) | expired | superseded

A wrong code keeps the staged entry so the user can retry until it expires.
Store failures during verification also keep it, so the user can retry
without requesting a new code.
"""

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from app.application.services.registration_ledger import (
    PendingRegistration,
    PendingRegistrationLedger,
    RegistrationCandidate,
    normalize_email,
)
from app.application.services.validation import clean, require_fields
from app.core.exceptions import (
    CodeMismatchError,
    DuplicateAccountError,
    NoPendingRequestError,
    NotificationFailureError,
    OtpExpiredError,
    StoreFailureError,
)
from app.domain.models.user import DEFAULT_ROLE, User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.otp import SendCodeRequest, VerifyCodeRequest
from app.infrastructure.email_sender import NotificationSender

logger = structlog.get_logger(__name__)

EMAIL_SUBJECT = "Your Food App verification code"


def format_code_email(entry: PendingRegistration, ttl_minutes: int) -> tuple[str, str]:
    """Build the (text, html) bodies carrying the verification code."""
    name = entry.candidate.full_name or entry.candidate.username
    text = (
        f"Hello {name},\n\n"
        f"Your verification code is: {entry.code}\n"
        f"It expires in {ttl_minutes} minutes. If you did not sign up, ignore this email."
    )
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 480px; margin: 0 auto;">
        <h2 style="color: #e65100;">Food App</h2>
        <p>Hello {name},</p>
        <p>Your verification code is:</p>
        <p style="font-size: 28px; font-weight: bold; letter-spacing: 6px;">{entry.code}</p>
        <p>It expires in {ttl_minutes} minutes. If you did not sign up, ignore this email.</p>
    </div>
    """
    return text, html


async def send_code(
    body: SendCodeRequest,
    repo: UserRepository,
    ledger: PendingRegistrationLedger,
    sender: NotificationSender,
) -> PendingRegistration:
    """Stage a registration and email its code.

    Raises MissingFieldError, DuplicateAccountError, StoreFailureError or
    NotificationFailureError. On a failed send the staged entry is dropped.
    """
    require_fields(
        "Username, password and email are required",
        username=body.username,
        password=body.password,
        email=body.email,
    )
    candidate = RegistrationCandidate(
        username=clean(body.username),
        password=body.password,
        email=normalize_email(body.email),
        full_name=clean(body.full_name),
        phone=clean(body.phone),
    )

    try:
        # Blocking DB call, kept off the event loop
        taken = await run_in_threadpool(repo.exists_username_or_email, candidate.username, candidate.email)
    except SQLAlchemyError as e:
        logger.error("Duplicate check failed", email=candidate.email, error=str(e))
        raise StoreFailureError("Server error: " + str(e), details={"error": str(e)}) from e
    if taken:
        raise DuplicateAccountError("Username or email is already registered")

    entry = ledger.stage(candidate)
    ttl_minutes = int(ledger.ttl.total_seconds() // 60)
    text, html = format_code_email(entry, ttl_minutes)

    sent = await sender.send(candidate.email, EMAIL_SUBJECT, text, html)
    if not sent:
        ledger.discard(candidate.email, entry)
        logger.warning("Verification email not sent", email=candidate.email)
        raise NotificationFailureError("Could not send the verification email, please try again")

    logger.info("Verification code sent", email=candidate.email, username=candidate.username)
    return entry


def verify_code(
    body: VerifyCodeRequest,
    repo: UserRepository,
    ledger: PendingRegistrationLedger,
) -> User:
    """Check a code and promote the staged registration into a user.

    Checks, in order: no pending request, expired (entry dropped), wrong code
    (entry kept). The entry is removed only after the user row is committed.
    """
    require_fields("Email and OTP are required", email=body.email, otp=body.otp)
    email = normalize_email(body.email)
    code = body.otp.strip()

    entry = ledger.get(email)
    if entry is None:
        raise NoPendingRequestError()

    if entry.is_expired(ledger.now()):
        ledger.discard(email, entry)
        logger.info("Verification code expired", email=email)
        raise OtpExpiredError()

    if code != entry.code:
        logger.info("Verification code mismatch", email=email)
        raise CodeMismatchError()

    try:
        user = repo.create({**entry.candidate.as_user_fields(), "role": DEFAULT_ROLE})
    except IntegrityError as e:
        logger.warning("Account created concurrently", email=email, username=entry.candidate.username)
        raise DuplicateAccountError("Username or email is already registered") from e
    except SQLAlchemyError as e:
        logger.error("Could not create account", email=email, error=str(e))
        raise StoreFailureError("Server error: " + str(e), details={"error": str(e)}) from e

    ledger.discard(email, entry)
    logger.info("Account created", user_id=user.id, username=user.username)
    return user
