"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from app.config import get_settings
from app.infrastructure.database import engine, Base
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import register_exception_handlers
from app.application.services.registration_ledger import PendingRegistrationLedger
from app.infrastructure.email_sender import build_notification_sender

# Import all models so SQLAlchemy knows about them
from app.domain.models.user import User  # noqa: F401
from app.domain.models.category import Category  # noqa: F401
from app.domain.models.product import Product  # noqa: F401

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.otp import router as otp_router
from app.interfaces.api.catalog import router as catalog_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Food Delivery API...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only, use migrations in production)
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error("Database connection failed, tables not verified", error=str(e))

    app.state.ledger = PendingRegistrationLedger(ttl=timedelta(minutes=settings.OTP_TTL_MINUTES))
    app.state.notification_sender = build_notification_sender(settings)
    logger.info("Notification sender ready", provider=settings.EMAIL_PROVIDER)

    from app.scheduler.jobs import start_scheduler
    start_scheduler(app.state.ledger)

    yield

    from app.scheduler.jobs import stop_scheduler
    stop_scheduler()
    await app.state.notification_sender.aclose()
    logger.info("Food Delivery API stopped")


app = FastAPI(
    title=settings.APP_NAME,
    description="Backend for the food delivery mobile app: accounts, OTP sign-up, catalog",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)
register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(otp_router)
app.include_router(catalog_router)


@app.get("/", response_class=HTMLResponse)
def root(request: Request):
    """Liveness page for a quick browser check."""
    base_url = str(request.base_url).rstrip("/")
    return f"""
        <h1 style="color: green; text-align: center; margin-top: 20%;">
            Food App server is running!
        </h1>
        <p style="text-align: center;">Base URL: <b>{base_url}</b></p>
    """


@app.get("/health")
def health():
    return {"status": "healthy"}
