"""OTP registration routes — request a code by email, verify it."""

from fastapi import APIRouter, Depends

from app.application.services.otp_service import send_code, verify_code
from app.application.services.registration_ledger import PendingRegistrationLedger
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import MessageResponse
from app.domain.schemas.otp import SendCodeRequest, VerifyCodeRequest
from app.infrastructure.email_sender import NotificationSender
from app.interfaces.deps import get_ledger, get_notification_sender, get_user_repository

router = APIRouter(prefix="/api/otp", tags=["OTP"])


@router.post("/send", response_model=MessageResponse)
async def send(
    body: SendCodeRequest,
    repo: UserRepository = Depends(get_user_repository),
    ledger: PendingRegistrationLedger = Depends(get_ledger),
    sender: NotificationSender = Depends(get_notification_sender),
):
    await send_code(body, repo, ledger, sender)
    return MessageResponse(message="A verification code has been sent to your email")


@router.post("/verify", response_model=MessageResponse)
def verify(
    body: VerifyCodeRequest,
    repo: UserRepository = Depends(get_user_repository),
    ledger: PendingRegistrationLedger = Depends(get_ledger),
):
    verify_code(body, repo, ledger)
    return MessageResponse(message="Registration successful! You can now log in.")
