"""Home screen routes: counter, milestone, reminders."""

from dataclasses import asdict
from typing import List

from core.dependencies import get_dashboard
from fastapi import APIRouter, Depends
from schemas import DashboardOverview, ElapsedTimeOut, MilestoneOut, ReminderEntryOut
from services import DashboardService

router = APIRouter()


@router.get("", response_model=DashboardOverview)
async def get_overview(dashboard: DashboardService = Depends(get_dashboard)):
    return await dashboard.overview()


@router.get("/counter", response_model=ElapsedTimeOut)
async def get_counter(dashboard: DashboardService = Depends(get_dashboard)):
    """Polled every second by the counter display."""
    return asdict(await dashboard.counter())


@router.get("/milestone", response_model=MilestoneOut)
async def get_milestone(dashboard: DashboardService = Depends(get_dashboard)):
    return asdict(await dashboard.milestone())


@router.get("/reminders", response_model=List[ReminderEntryOut])
async def get_reminders(dashboard: DashboardService = Depends(get_dashboard)):
    """Today's reminder feed. Also sends any notification that is due."""
    return [asdict(entry) for entry in await dashboard.reminders()]
