"""
Application error taxonomy and the handlers that render it.

Every error answers with the same JSON shape the mobile client reads:
{"success": false, "message": "...", "code": "<ErrorClass>"}.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class MissingFieldError(AppError):
    """A required request field is absent or blank."""
    def __init__(self, message: str = "Missing required fields", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class DuplicateAccountError(AppError):
    """Username or email already belongs to an account."""
    def __init__(self, message: str = "This account is already taken", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class InvalidCredentialsError(AppError):
    def __init__(self, message: str = "Wrong username or password", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class NoPendingRequestError(AppError):
    """No verification code was requested for this email (or it was already used)."""
    def __init__(self, message: str = "No verification request found for this email", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class OtpExpiredError(AppError):
    def __init__(self, message: str = "The verification code has expired, please request a new one", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class CodeMismatchError(AppError):
    def __init__(self, message: str = "Incorrect verification code", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class NotificationFailureError(AppError):
    """The notification sender rejected or failed to deliver the message."""
    def __init__(self, message: str = "Could not send the verification email", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


class StoreFailureError(AppError):
    """The account store failed for a reason other than a duplicate key."""
    def __init__(self, message: str = "Server error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


def _error_body(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message, "code": code}
    if details:
        body.update(details)
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render a taxonomy error."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            path=request.url.path,
            code=exc.__class__.__name__,
            error=exc.message,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.__class__.__name__, exc.message, exc.details),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are a client error, reported like a missing field."""
    fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            MissingFieldError.__name__,
            "Invalid request data",
            {"fields": [f for f in fields if f]},
        ),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    logger.exception("Unexpected error occurred", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("InternalServerError", "An unexpected error occurred. Please try again later."),
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
