"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_goal.domain.models import FinancialGoal, GoalDraft


class GoalRepositoryProtocol(Protocol):
    async def create(self, db: AsyncSession, draft: GoalDraft) -> FinancialGoal: ...

    async def list_by_user(self, db: AsyncSession, user_id: int) -> list[FinancialGoal]: ...

    async def get_by_id(self, db: AsyncSession, goal_id: int) -> FinancialGoal | None: ...

    async def update(
        self, db: AsyncSession, goal_id: int, draft: GoalDraft
    ) -> FinancialGoal | None: ...

    async def delete(self, db: AsyncSession, goal_id: int) -> bool: ...
