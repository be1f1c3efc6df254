"""
Daily content scheduler.

Runs DailyGeneratorService once a day at settings.daily_generator_hour in
settings.daily_generator_timezone, then purges items older than the
retention period. Runs as a FastAPI background task started from the
lifespan handler.
"""

import asyncio
from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError

from rest_api.services.domain.current_affairs_service import CurrentAffairsService
from rest_api.services.domain.daily_generator_service import DailyGeneratorService
from shared.config.logging import content_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db_context
from shared.utils.exceptions import AppException


def seconds_until(hour: int, now: datetime) -> float:
    """
    Seconds from `now` (timezone-aware) to the next occurrence of hour:00
    in the same timezone.
    """
    target = datetime.combine(now.date(), time(hour=hour), tzinfo=now.tzinfo)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


class DailyContentScheduler:
    """
    Sleeps until the configured hour, runs the generation, repeats.
    Failures are logged and the next day is still scheduled.
    """

    def __init__(self, hour: int | None = None, timezone: str | None = None):
        self.hour = settings.daily_generator_hour if hour is None else hour
        self.zone = ZoneInfo(timezone or settings.daily_generator_timezone)
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            logger.warning("Daily content scheduler already running")
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Daily content scheduler started", hour=self.hour, timezone=str(self.zone))

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        logger.info("Daily content scheduler stopped")

    async def _run_loop(self) -> None:
        while self._running:
            delay = seconds_until(self.hour, datetime.now(self.zone))
            logger.debug("Next daily generation scheduled", in_seconds=round(delay))
            await asyncio.sleep(delay)
            try:
                await self.run_once()
            except Exception as e:
                logger.error("Daily content run crashed", error=str(e), exc_info=True)

    async def run_once(self) -> dict:
        """One generation plus cleanup. Failures are logged and reported, never raised."""
        today = datetime.now(self.zone).date()
        try:
            with get_db_context() as db:
                result = await DailyGeneratorService(db).generate_daily(today)
                CurrentAffairsService(db).cleanup()
            return result
        except (AppException, SQLAlchemyError) as e:
            logger.error("Daily generation failed", date=today.isoformat(), error=str(e))
            return {"success": False, "message": "Daily generation failed", "generated": False, "error": str(e)}
        except Exception as e:
            logger.error("Unexpected error in daily generation", date=today.isoformat(), error=str(e), exc_info=True)
            return {"success": False, "message": "Daily generation failed", "generated": False, "error": str(e)}


_scheduler: DailyContentScheduler | None = None


async def start_daily_scheduler() -> DailyContentScheduler:
    global _scheduler
    if _scheduler is None:
        _scheduler = DailyContentScheduler()
    await _scheduler.start()
    return _scheduler


async def stop_daily_scheduler() -> None:
    global _scheduler
    if _scheduler is not None:
        await _scheduler.stop()
        _scheduler = None
