"""
Plan list workflows: search, sort, pin, complete.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from core.clock import Clock
from domain.services.dates import ceil_days, try_parse_local_datetime
from domain.value_objects.enums import Collection, MemoryType, PlanSort
from schemas import Memory, Plan, PlanCountdown, PlanCreate

from services.persistent_store import PersistentStore

logger = logging.getLogger("PlanService")

ACHIEVEMENT_TAG = "achievement"


class PlanService:
    def __init__(self, store: PersistentStore, clock: Clock):
        self.store = store
        self.clock = clock

    def _target(self, plan: Plan) -> Optional[datetime]:
        return try_parse_local_datetime(plan.target_date, self.clock.tz)

    async def list_plans(self, sort: PlanSort = PlanSort.DATE, query: Optional[str] = None) -> List[Plan]:
        """
        Plans matching `query` (case-insensitive title match).

        Date sort is ascending with unparseable dates last; priority sort is
        high to low and keeps date order within a priority.
        """
        plans = await self.store.get_all(Collection.PLANS)
        if query:
            needle = query.lower()
            plans = [plan for plan in plans if needle in plan.title.lower()]

        plans.sort(key=lambda plan: (self._target(plan) is None, self._target(plan) or datetime.min))
        if PlanSort(sort) == PlanSort.PRIORITY:
            plans.sort(key=lambda plan: plan.priority.rank, reverse=True)
        return plans

    async def pinned(self) -> List[Plan]:
        """Pinned, incomplete plans by target date."""
        plans = await self.list_plans(PlanSort.DATE)
        return [plan for plan in plans if plan.is_pinned and not plan.completed]

    async def create(self, data: PlanCreate) -> Plan:
        plan = Plan.model_validate({**data.model_dump(), "id": data.id or uuid.uuid4().hex})
        await self.store.put(Collection.PLANS, plan)
        logger.info(f"Created plan {plan.id}: {plan.title}")
        return plan

    async def update(self, plan_id: str, data: PlanCreate) -> Plan:
        """
        Replace a plan.

        Raises:
            RecordNotFound: If the plan does not exist
        """
        await self.store.require(Collection.PLANS, plan_id)
        plan = Plan.model_validate({**data.model_dump(), "id": plan_id})
        return await self.store.put(Collection.PLANS, plan)

    async def delete(self, plan_id: str) -> bool:
        return await self.store.delete(Collection.PLANS, plan_id)

    async def toggle_pin(self, plan_id: str) -> Plan:
        plan = await self.store.require(Collection.PLANS, plan_id)
        updated = plan.model_copy(update={"is_pinned": not plan.is_pinned})
        return await self.store.put(Collection.PLANS, updated)

    async def toggle_complete(self, plan_id: str, save_as_memory: bool = False) -> Plan:
        """
        Flip the completed flag.

        When the plan becomes complete and save_as_memory is set, an
        achievement memory is recorded as well.
        """
        plan = await self.store.require(Collection.PLANS, plan_id)
        updated = plan.model_copy(update={"completed": not plan.completed})
        await self.store.put(Collection.PLANS, updated)

        if updated.completed and save_as_memory:
            memory = self.achievement_memory(updated)
            await self.store.put(Collection.MEMORIES, memory)
            logger.info(f"Saved achievement memory {memory.id} for plan {plan_id}")
        return updated

    def achievement_memory(self, plan: Plan) -> Memory:
        content = "Plan completed!"
        if plan.description:
            content += f"\n{plan.description}"
        return Memory(
            id=uuid.uuid4().hex,
            date=self.clock.now().isoformat(timespec="seconds"),
            title=f"Completed: {plan.title}",
            content=content,
            type=MemoryType.TEXT,
            tags=[ACHIEVEMENT_TAG],
        )

    def days_until(self, plan: Plan) -> Optional[int]:
        """Days from now to the plan's target date (negative when overdue)."""
        target = self._target(plan)
        if target is None:
            return None
        return ceil_days(target, self.clock.now())

    def countdown(self, plan: Plan) -> PlanCountdown:
        return PlanCountdown(plan=plan, days_left=self.days_until(plan))

