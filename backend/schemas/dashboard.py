"""Read models for the home screen."""

from typing import List

from domain.value_objects.enums import ReminderKind

from schemas.common import CamelSchema
from schemas.plans import Plan


class ElapsedTimeOut(CamelSchema):
    years: int
    months: int
    weeks: int
    days: int
    hours: int
    minutes: int
    seconds: int
    total_days: int


class MilestoneOut(CamelSchema):
    days_left: int
    label: str
    target_date: str


class ReminderEntryOut(CamelSchema):
    title: str
    date: str
    kind: ReminderKind


class PartnerSummary(CamelSchema):
    name: str
    zodiac: str


class DashboardOverview(CamelSchema):
    counter: ElapsedTimeOut
    milestone: MilestoneOut
    reminders: List[ReminderEntryOut]
    pinned_plans: List[Plan]
    partners: List[PartnerSummary]


__all__ = [
    "ElapsedTimeOut",
    "MilestoneOut",
    "ReminderEntryOut",
    "PartnerSummary",
    "DashboardOverview",
]
