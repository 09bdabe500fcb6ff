"""Plan list, CRUD, pin and completion routes."""

from typing import List, Optional

from core.dependencies import get_plan_service
from domain.exceptions import RecordNotFound
from domain.value_objects.enums import PlanSort
from fastapi import APIRouter, Body, Depends, Query
from schemas import Plan, PlanCompletion, PlanCountdown, PlanCreate
from services import PlanService

router = APIRouter()


@router.get("", response_model=List[PlanCountdown])
async def list_plans(
    sort: PlanSort = Query(PlanSort.DATE),
    q: Optional[str] = Query(None, description="Case-insensitive title search"),
    service: PlanService = Depends(get_plan_service),
):
    """Plans with their day countdowns."""
    plans = await service.list_plans(sort=sort, query=q)
    return [service.countdown(plan) for plan in plans]


@router.post("", response_model=Plan, status_code=201)
async def create_plan(plan: PlanCreate, service: PlanService = Depends(get_plan_service)):
    return await service.create(plan)


@router.put("/{plan_id}", response_model=Plan)
async def update_plan(plan_id: str, plan: PlanCreate, service: PlanService = Depends(get_plan_service)):
    return await service.update(plan_id, plan)


@router.delete("/{plan_id}")
async def delete_plan(plan_id: str, service: PlanService = Depends(get_plan_service)):
    if not await service.delete(plan_id):
        raise RecordNotFound("plans", plan_id)
    return {"message": "Plan deleted successfully"}


@router.post("/{plan_id}/pin", response_model=Plan)
async def toggle_pin(plan_id: str, service: PlanService = Depends(get_plan_service)):
    return await service.toggle_pin(plan_id)


@router.post("/{plan_id}/complete", response_model=Plan)
async def toggle_complete(
    plan_id: str,
    body: Optional[PlanCompletion] = Body(None),
    service: PlanService = Depends(get_plan_service),
):
    """Toggle completion; optionally record an achievement memory."""
    save_as_memory = body.save_as_memory if body else False
    return await service.toggle_complete(plan_id, save_as_memory=save_as_memory)
