"""
Background ticks for the dashboard.

- Counter tick (every counter_tick_seconds): recompute the elapsed-time counter.
- Reminder tick (every reminder_check_seconds): evaluate reminders so
  exact-time plan reminders fire close to their time.
- Daily tick (cron at daily_reminder_hour): evaluate reminders at the start of
  the day.

Jobs never overlap: a slow run makes the next one skip instead of stacking.
"""

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from domain.exceptions import StorageUnavailable
from services.dashboard_service import DashboardService

logger = logging.getLogger("BackgroundScheduler")

# Suppress noisy APScheduler "max instances reached" warnings
logging.getLogger("apscheduler.scheduler").setLevel(logging.ERROR)

COUNTER_JOB_ID = "refresh_counter"
REMINDER_JOB_ID = "check_reminders"
DAILY_REMINDER_JOB_ID = "daily_reminders"


class BackgroundScheduler:
    """Drives the counter and reminder ticks of a DashboardService."""

    def __init__(
        self,
        dashboard: DashboardService,
        counter_tick_seconds: float = 1.0,
        reminder_check_seconds: int = 60,
        daily_reminder_hour: int = 0,
        timezone=None,
    ):
        scheduler_kwargs = {"timezone": timezone} if timezone is not None else {}
        self.scheduler = AsyncIOScheduler(**scheduler_kwargs)
        self.dashboard = dashboard
        self.counter_tick_seconds = counter_tick_seconds
        self.reminder_check_seconds = reminder_check_seconds
        self.daily_reminder_hour = daily_reminder_hour
        self.is_running = False
        self._last_error: Optional[str] = None

    def start(self):
        """Start the background scheduler."""
        if self.is_running:
            return

        self.scheduler.add_job(
            self._refresh_counter,
            "interval",
            seconds=self.counter_tick_seconds,
            id=COUNTER_JOB_ID,
            replace_existing=True,
            max_instances=1,  # Only one instance at a time
            coalesce=True,  # Skip missed runs if previous job still running
            misfire_grace_time=None,
        )
        self.scheduler.add_job(
            self._check_reminders,
            "interval",
            seconds=self.reminder_check_seconds,
            id=REMINDER_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=None,
        )
        self.scheduler.add_job(
            self._check_reminders,
            "cron",
            hour=self.daily_reminder_hour,
            minute=0,
            id=DAILY_REMINDER_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        self.scheduler.start()
        self.is_running = True
        logger.info(
            f"🚀 Background scheduler started - counter every {self.counter_tick_seconds}s, "
            f"reminders every {self.reminder_check_seconds}s and daily at {self.daily_reminder_hour:02d}:00"
        )

    def stop(self):
        """Stop the background scheduler."""
        if self.is_running:
            self.scheduler.shutdown(wait=False)
            self.is_running = False
            logger.info("🛑 Background scheduler stopped")

    async def _refresh_counter(self):
        try:
            await self.dashboard.refresh_counter()
            self._last_error = None
        except StorageUnavailable as e:
            self._log_once(f"Counter tick skipped: {e}")

    async def _check_reminders(self):
        try:
            feed = await self.dashboard.refresh_reminders()
            self._last_error = None
        except StorageUnavailable as e:
            self._log_once(f"Reminder tick skipped: {e}")
            return
        if feed.dispatched:
            logger.info(f"🔔 Sent {len(feed.dispatched)} notification(s)")

    def _log_once(self, message: str) -> None:
        # The counter ticks every second; repeat the same failure at debug level only
        if message != self._last_error:
            logger.error(message)
        else:
            logger.debug(message)
        self._last_error = message
