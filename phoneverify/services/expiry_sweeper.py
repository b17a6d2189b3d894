"""
phoneverify/services/expiry_sweeper.py

Purpose: Background cleanup of expired verification codes

- Periodically purges codes nobody came back to verify
- Keeps the in-memory store from growing without bound
- Runs as an APScheduler interval job, started and stopped by the
  application lifespan
"""

from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from phoneverify.core.logging import get_logger
from phoneverify.services.verification_service import VerificationService

logger = get_logger(__name__)

SWEEP_JOB_ID = "purge_expired_codes"


async def sweep_expired_codes(service: VerificationService) -> int:
    """
    Purges expired codes once. Runs on the event loop, so it never
    interleaves with a store call made by a request.
    """
    removed = service.purge_expired()
    if removed:
        logger.info(f"🧹 Removed {removed} expired verification codes")
    return removed


def start_expiry_sweeper(
    service: VerificationService,
    interval_seconds: float,
    scheduler: Optional[AsyncIOScheduler] = None
) -> Optional[AsyncIOScheduler]:
    """
    Registers the sweep job and starts the scheduler on the running loop.
    Returns None when the sweep is disabled (interval 0).
    """
    if interval_seconds <= 0:
        logger.info("Expiry sweeper disabled")
        return None

    scheduler = scheduler or AsyncIOScheduler()
    scheduler.add_job(
        sweep_expired_codes,
        'interval',
        seconds=interval_seconds,
        args=[service],
        id=SWEEP_JOB_ID,
        replace_existing=True,
        coalesce=True,
        max_instances=1
    )
    scheduler.start()

    logger.info(f"Expiry sweeper running every {interval_seconds}s")
    return scheduler


def stop_expiry_sweeper(scheduler: Optional[AsyncIOScheduler]):
    """Removes the sweep job and shuts the scheduler down."""
    if scheduler is None:
        return

    scheduler.remove_all_jobs()
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Expiry sweeper stopped")
