"""GoalApplicationService — financial goals of the calling user.

A goal owned by someone else is reported as not found.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.database import store_errors, unit_of_work
from src.pf_common.errors import GoalNotFoundError
from src.pf_goal.application.schemas import (
    GoalProgressResponse,
    GoalRequest,
    GoalResponse,
)
from src.pf_goal.domain.models import FinancialGoal, GoalDraft
from src.pf_goal.domain.repository import GoalRepositoryProtocol
from src.pf_goal.infrastructure.persistence import GoalRepository


def _draft(user_id: int, req: GoalRequest) -> GoalDraft:
    return GoalDraft(
        user_id=user_id,
        name=req.name,
        target_amount_cents=req.target_amount_cents,
        saved_amount_cents=req.saved_amount_cents,
        deadline=req.deadline,
        priority=req.priority,
        description=req.description,
    )


class GoalApplicationService:
    def __init__(self, repo: GoalRepositoryProtocol | None = None) -> None:
        self._repo: GoalRepositoryProtocol = repo or GoalRepository()

    async def create_goal(self, db: AsyncSession, user_id: int, req: GoalRequest) -> GoalResponse:
        async with unit_of_work(db):
            goal = await self._repo.create(db, _draft(user_id, req))
        return GoalResponse.from_domain(goal)

    async def list_goals(self, db: AsyncSession, user_id: int) -> list[GoalResponse]:
        with store_errors():
            goals = await self._repo.list_by_user(db, user_id)
        return [GoalResponse.from_domain(g) for g in goals]

    async def get_goal(self, db: AsyncSession, user_id: int, goal_id: int) -> GoalResponse:
        with store_errors():
            goal = await self._owned(db, user_id, goal_id)
        return GoalResponse.from_domain(goal)

    async def update_goal(
        self, db: AsyncSession, user_id: int, goal_id: int, req: GoalRequest
    ) -> GoalResponse:
        async with unit_of_work(db):
            await self._owned(db, user_id, goal_id)
            goal = await self._repo.update(db, goal_id, _draft(user_id, req))
            if goal is None:
                raise GoalNotFoundError(goal_id)
        return GoalResponse.from_domain(goal)

    async def delete_goal(self, db: AsyncSession, user_id: int, goal_id: int) -> None:
        async with unit_of_work(db):
            await self._owned(db, user_id, goal_id)
            if not await self._repo.delete(db, goal_id):
                raise GoalNotFoundError(goal_id)

    async def goal_progress(self, db: AsyncSession, user_id: int) -> list[GoalProgressResponse]:
        with store_errors():
            goals = await self._repo.list_by_user(db, user_id)
        return [GoalProgressResponse.from_domain(g) for g in goals]

    async def _owned(self, db: AsyncSession, user_id: int, goal_id: int) -> FinancialGoal:
        goal = await self._repo.get_by_id(db, goal_id)
        if goal is None or goal.user_id != user_id:
            raise GoalNotFoundError(goal_id)
        return goal
