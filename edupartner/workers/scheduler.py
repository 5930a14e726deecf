"""
In-process scheduler for the periodic jobs.

Run with `python -m edupartner.workers.scheduler`. Each job gets a fresh
session per run; a failing run is logged and retried on the next tick.
"""
import asyncio
import logging
from datetime import datetime
from typing import Dict, Optional

from edupartner.core.timezone import utc_now
from edupartner.config import settings
from edupartner.database import async_session
from edupartner.services.job_service import JobService

logger = logging.getLogger(__name__)

JOBS = [
    {
        "name": "launch_due_campaigns",
        "interval": settings.CAMPAIGN_SCAN_INTERVAL_SECONDS,
    },
    {
        "name": "refresh_scores",
        "interval": settings.SCORE_REFRESH_INTERVAL_SECONDS,
    },
    {
        "name": "expire_agreements",
        "interval": settings.SCORE_REFRESH_INTERVAL_SECONDS,
    },
]


def is_due(job: dict, last_runs: Dict[str, datetime], now: datetime) -> bool:
    """A job is due if it never ran or its interval has elapsed."""
    last = last_runs.get(job["name"])
    return last is None or (now - last).total_seconds() >= job["interval"]


async def execute_job(name: str, now: Optional[datetime] = None):
    """Run one job in its own session."""
    now = now or utc_now()
    try:
        async with async_session() as session:
            result = await getattr(JobService(session), name)(now)
        logger.info(f"Job {name} finished: {result}")
    except Exception as e:
        logger.error(f"Job {name} failed: {e}", exc_info=True)


async def scheduler_loop(tick_seconds: float = 1.0):
    """Main scheduler loop."""
    logger.info(f"Scheduler started with {len(JOBS)} jobs")
    last_runs: Dict[str, datetime] = {}

    while True:
        now = utc_now()
        for job in JOBS:
            if is_due(job, last_runs, now):
                last_runs[job["name"]] = now
                await execute_job(job["name"], now)
        await asyncio.sleep(tick_seconds)


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    try:
        asyncio.run(scheduler_loop())
    except KeyboardInterrupt:
        logger.info("Scheduler stopped")
