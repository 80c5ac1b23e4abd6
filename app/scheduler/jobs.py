"""APScheduler jobs — sweep expired pending registrations."""

import logging

import pytz
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.application.services.registration_ledger import PendingRegistrationLedger
from app.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)
tz = pytz.timezone(settings.TIMEZONE)

scheduler = AsyncIOScheduler(timezone=tz)

SWEEP_JOB_ID = "pending_registration_sweep"


def sweep_pending_registrations(ledger: PendingRegistrationLedger) -> int:
    """Periodic job: drop codes that expired without being verified."""
    try:
        removed = ledger.sweep()
    except Exception as e:
        logger.error(f"Pending registration sweep failed: {e}")
        return 0
    logger.debug(f"Pending registration sweep removed {removed}, {len(ledger)} still pending")
    return removed


def start_scheduler(ledger: PendingRegistrationLedger):
    """Start the APScheduler with the ledger sweep job."""
    scheduler.add_job(
        sweep_pending_registrations,
        trigger=IntervalTrigger(seconds=settings.OTP_SWEEP_INTERVAL_SECONDS, timezone=tz),
        args=[ledger],
        id=SWEEP_JOB_ID,
        name="Pending registration sweep",
        replace_existing=True,
    )

    scheduler.start()
    logger.info(f"Scheduler started, pending registrations swept every {settings.OTP_SWEEP_INTERVAL_SECONDS}s")


def stop_scheduler():
    """Stop the scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
