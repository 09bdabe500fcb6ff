"""
Home screen read models.

Every read is computed from the store, so puts, deletes, resets and restores
show up on the next call. The scheduler ticks keep the latest counter and feed
here as well.
"""

import logging
from dataclasses import asdict
from typing import List, Optional

from core.clock import Clock
from domain.services import calculate_elapsed_time, next_milestone, zodiac_sign
from domain.value_objects.time_models import ElapsedTime, Milestone, ReminderEntry, ReminderFeed
from schemas import CoupleSettings, DashboardOverview, PartnerSummary

from services.plan_service import PlanService
from services.reminder_service import ReminderEvaluator
from services.settings_service import SettingsService

logger = logging.getLogger("DashboardService")


class DashboardService:
    def __init__(
        self,
        settings_service: SettingsService,
        plan_service: PlanService,
        reminder_evaluator: ReminderEvaluator,
        clock: Clock,
    ):
        self.settings_service = settings_service
        self.plan_service = plan_service
        self.reminder_evaluator = reminder_evaluator
        self.clock = clock
        self.latest_counter: Optional[ElapsedTime] = None
        self.latest_feed: Optional[ReminderFeed] = None

    def _elapsed(self, settings: CoupleSettings) -> ElapsedTime:
        return calculate_elapsed_time(
            settings.start_date, self.clock.now(), settings.count_from_day_one, tz=self.clock.tz
        )

    async def counter(self) -> ElapsedTime:
        settings = await self.settings_service.current()
        return self._elapsed(settings)

    async def milestone(self) -> Milestone:
        settings = await self.settings_service.current()
        return next_milestone(settings.start_date, self.clock.now(), tz=self.clock.tz)

    async def reminders(self) -> List[ReminderEntry]:
        """The reminder feed, evaluated against what is in the store right now."""
        feed = await self.refresh_reminders()
        return list(feed.entries)

    async def overview(self) -> DashboardOverview:
        settings = await self.settings_service.current()
        tz = self.clock.tz
        return DashboardOverview(
            counter=asdict(self._elapsed(settings)),
            milestone=asdict(next_milestone(settings.start_date, self.clock.now(), tz=tz)),
            reminders=[asdict(entry) for entry in await self.reminders()],
            pinned_plans=await self.plan_service.pinned(),
            partners=[
                PartnerSummary(name=partner.name, zodiac=zodiac_sign(partner.dob, tz))
                for partner in (settings.partner1, settings.partner2)
            ],
        )

    async def refresh_counter(self) -> ElapsedTime:
        """Counter tick target."""
        self.latest_counter = await self.counter()
        return self.latest_counter

    async def refresh_reminders(self) -> ReminderFeed:
        """Reminder tick target. Also dispatches due notifications."""
        self.latest_feed = await self.reminder_evaluator.evaluate()
        if self.latest_feed.entries:
            logger.debug(f"Reminder feed: {self.latest_feed.titles}")
        return self.latest_feed
