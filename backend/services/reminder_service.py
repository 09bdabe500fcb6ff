"""
Reminder evaluation.

One pass turns the stored settings, plans and memories into today's reminder
feed, and asks the NotificationDispatcher to announce the entries that are due
right now. Each notification goes out at most once per calendar day; the
"already notified" markers live in memory only and reset on restart.
"""

import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple

from core.clock import Clock
from domain.exceptions import DateParseError
from domain.services.dates import (
    DateLike,
    ceil_days,
    parse_local_datetime,
    project_onto_year,
    same_calendar_day,
    start_of_day,
)
from domain.value_objects.enums import Collection, ReminderKind
from domain.value_objects.time_models import NotificationRequest, ReminderEntry, ReminderFeed
from infrastructure.notifications import NotificationDispatcher
from schemas import CoupleSettings, Memory, Plan

from services.persistent_store import PersistentStore

logger = logging.getLogger("ReminderEvaluator")

ANNIVERSARY_TITLE = "Our Anniversary"
VALENTINE_TITLE = "Valentine's Day"
VALENTINE_DATE = (2, 14)

# (month, day, title)
FIXED_HOLIDAYS: Tuple[Tuple[int, int, str], ...] = (
    (1, 1, "New Year's Day"),
    (3, 8, "International Women's Day"),
    (4, 30, "Reunification Day"),
    (5, 1, "International Workers' Day"),
    (9, 2, "National Day"),
    (10, 20, "Vietnamese Women's Day"),
    (12, 24, "Christmas Eve"),
)

# Annual events are checked on this year and the next one
YEAR_OFFSETS = (0, 1)


def countdown_title(title: str, days_left: int) -> str:
    return f"{title} ({days_left} days left)"


def exact_time_title(title: str) -> str:
    return f"Time for: {title}"


def on_this_day_title(years_ago: int, title: str) -> str:
    return f"{years_ago} years ago today: {title}"


def birthday_title(name: str, index: int) -> str:
    return f"{name or f'Partner {index}'}'s Birthday"


class ReminderEvaluator:
    """
    Produces the reminder feed and sends the due notifications.

    Rules, in order:
    1. Plan countdowns for incomplete plans whose target date is a configured
       number of days away.
    2. Exact-time plan reminders that are due today.
    3. Annual events: anniversary, birthdays, Valentine's Day, holidays.
    4. Memories from the same month/day in earlier years.
    """

    def __init__(self, store: PersistentStore, dispatcher: NotificationDispatcher, clock: Clock):
        self.store = store
        self.dispatcher = dispatcher
        self.clock = clock
        self._notified: Dict[date, Set[str]] = {}

    async def evaluate(self) -> ReminderFeed:
        """
        Read the store and run one evaluation pass at the clock's current time.

        Raises:
            StorageUnavailable: If the store cannot be read
        """
        now = self.clock.now()
        settings = await self.store.get_settings() or CoupleSettings.defaults(now)
        plans = await self.store.get_all(Collection.PLANS)
        memories = await self.store.get_all(Collection.MEMORIES)
        return self.evaluate_records(settings, plans, memories, now)

    def evaluate_records(
        self,
        settings: CoupleSettings,
        plans: Iterable[Plan],
        memories: Iterable[Memory],
        now: Optional[datetime] = None,
    ) -> ReminderFeed:
        """Run one evaluation pass over the given records."""
        now = now or self.clock.now()
        today = start_of_day(now)
        self._prune_markers(today.date())

        feed = ReminderFeed()
        entries: List[ReminderEntry] = []
        offsets = set(settings.reminder_days)

        for plan in plans:
            if plan.completed:
                continue
            try:
                self._check_plan(plan, now, today, offsets, entries, feed)
            except DateParseError as e:
                logger.debug(f"Skipping plan {plan.id}: {e}")

        for title, value in self._annual_events(settings):
            try:
                self._check_annual(title, value, today, offsets, entries, feed)
            except DateParseError as e:
                logger.debug(f"Skipping annual event {title!r}: {e}")

        if settings.notifications.on_this_day:
            for memory in memories:
                try:
                    self._check_on_this_day(memory, today, entries)
                except DateParseError as e:
                    logger.debug(f"Skipping memory {memory.id}: {e}")

        feed.entries = _unique_by_title(entries)
        return feed

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _check_plan(
        self,
        plan: Plan,
        now: datetime,
        today: datetime,
        offsets: Set[int],
        entries: List[ReminderEntry],
        feed: ReminderFeed,
    ) -> None:
        target = start_of_day(parse_local_datetime(plan.target_date, self.clock.tz))
        days_left = ceil_days(target, today)
        if days_left in offsets:
            entries.append(ReminderEntry(countdown_title(plan.title, days_left), plan.target_date, ReminderKind.PLAN))

        if not plan.reminder_enabled or not plan.reminder_time:
            return
        reminder_at = parse_local_datetime(plan.reminder_time, self.clock.tz)
        if same_calendar_day(reminder_at, now) and now >= reminder_at:
            title = exact_time_title(plan.title)
            entries.append(ReminderEntry(title, plan.reminder_time, ReminderKind.PLAN))
            self._dispatch(
                feed,
                today.date(),
                NotificationRequest(title=title, body=f"It's time for your plan: {plan.title}"),
            )

    def _annual_events(self, settings: CoupleSettings) -> List[Tuple[str, DateLike]]:
        """(title, original date) of each enabled recurring event."""
        events: List[Tuple[str, DateLike]] = []
        toggles = settings.notifications

        if toggles.anniversary:
            events.append((ANNIVERSARY_TITLE, settings.start_date))
        for index, partner in ((1, settings.partner1), (2, settings.partner2)):
            if partner.dob:
                events.append((birthday_title(partner.name, index), partner.dob))
        if toggles.valentine:
            events.append((VALENTINE_TITLE, datetime(2000, *VALENTINE_DATE)))
        if toggles.holidays:
            events.extend((title, datetime(2000, month, day)) for month, day, title in FIXED_HOLIDAYS)

        return events

    def _check_annual(
        self,
        title: str,
        value: DateLike,
        today: datetime,
        offsets: Set[int],
        entries: List[ReminderEntry],
        feed: ReminderFeed,
    ) -> None:
        moment = parse_local_datetime(value, self.clock.tz)
        for offset in YEAR_OFFSETS:
            occurrence = project_onto_year(moment, today.year + offset)
            days_left = ceil_days(occurrence, today)
            if days_left < 0 or days_left not in offsets:
                continue
            entries.append(
                ReminderEntry(countdown_title(title, days_left), occurrence.date().isoformat(), ReminderKind.EVENT)
            )
            if days_left == 0:
                self._dispatch(feed, today.date(), NotificationRequest(title=f"Today: {title}", body=f"Today is {title}"))

    def _check_on_this_day(self, memory: Memory, today: datetime, entries: List[ReminderEntry]) -> None:
        happened = parse_local_datetime(memory.date, self.clock.tz)
        if (happened.month, happened.day) != (today.month, today.day) or happened.year >= today.year:
            return
        years_ago = today.year - happened.year
        entries.append(ReminderEntry(on_this_day_title(years_ago, memory.title), memory.date, ReminderKind.MEMORY))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, feed: ReminderFeed, day: date, request: NotificationRequest) -> None:
        sent_today = self._notified.setdefault(day, set())
        if request.title in sent_today:
            return
        try:
            self.dispatcher.notify(request.title, request.body)
        except Exception as e:
            # Not marked, so the next pass retries
            logger.warning(f"Notification {request.title!r} failed: {e}")
            return
        sent_today.add(request.title)
        feed.dispatched.append(request)
        logger.info(f"Dispatched notification: {request.title}")

    def _prune_markers(self, today: date) -> None:
        for day in [day for day in self._notified if day < today]:
            del self._notified[day]

    def was_notified(self, title: str, day: date) -> bool:
        return title in self._notified.get(day, set())


def _unique_by_title(entries: Iterable[ReminderEntry]) -> List[ReminderEntry]:
    """Drop entries whose title already appeared (first one wins)."""
    seen: Set[str] = set()
    unique = []
    for entry in entries:
        if entry.title in seen:
            continue
        seen.add(entry.title)
        unique.append(entry)
    return unique
