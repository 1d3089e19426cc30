"""GoalRepository — raw text() SQL over the financial_goals table."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_goal.domain.models import FinancialGoal, GoalDraft

_COLUMNS = (
    "id, user_id, name, target_amount_cents, saved_amount_cents, deadline, "
    "priority, description, created_at"
)

_INSERT_SQL = text(f"""
    INSERT INTO financial_goals
        (user_id, name, target_amount_cents, saved_amount_cents, deadline, priority, description)
    VALUES
        (:user_id, :name, :target_amount_cents, :saved_amount_cents, :deadline, :priority,
         :description)
    RETURNING {_COLUMNS}
""")

# Highest priority first, then nearest deadline (no deadline last).
_LIST_BY_USER_SQL = text(f"""
    SELECT {_COLUMNS} FROM financial_goals
    WHERE user_id = :user_id
    ORDER BY priority DESC, deadline ASC NULLS LAST, id
""")

_GET_SQL = text(f"SELECT {_COLUMNS} FROM financial_goals WHERE id = :goal_id")

_UPDATE_SQL = text(f"""
    UPDATE financial_goals
    SET name = :name,
        target_amount_cents = :target_amount_cents,
        saved_amount_cents = :saved_amount_cents,
        deadline = :deadline,
        priority = :priority,
        description = :description
    WHERE id = :goal_id
    RETURNING {_COLUMNS}
""")

_DELETE_SQL = text("DELETE FROM financial_goals WHERE id = :goal_id RETURNING id")


def _row_to_goal(row: object) -> FinancialGoal:
    return FinancialGoal(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        target_amount_cents=row.target_amount_cents,  # type: ignore[attr-defined]
        saved_amount_cents=row.saved_amount_cents,  # type: ignore[attr-defined]
        deadline=row.deadline,  # type: ignore[attr-defined]
        priority=row.priority,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


def _draft_params(draft: GoalDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "target_amount_cents": draft.target_amount_cents,
        "saved_amount_cents": draft.saved_amount_cents,
        "deadline": draft.deadline,
        "priority": draft.priority,
        "description": draft.description,
    }


class GoalRepository:
    async def create(self, db: AsyncSession, draft: GoalDraft) -> FinancialGoal:
        params = _draft_params(draft)
        params["user_id"] = draft.user_id
        result = await db.execute(_INSERT_SQL, params)
        return _row_to_goal(result.fetchone())

    async def list_by_user(self, db: AsyncSession, user_id: int) -> list[FinancialGoal]:
        result = await db.execute(_LIST_BY_USER_SQL, {"user_id": user_id})
        return [_row_to_goal(row) for row in result.fetchall()]

    async def get_by_id(self, db: AsyncSession, goal_id: int) -> FinancialGoal | None:
        result = await db.execute(_GET_SQL, {"goal_id": goal_id})
        row = result.fetchone()
        return _row_to_goal(row) if row else None

    async def update(
        self, db: AsyncSession, goal_id: int, draft: GoalDraft
    ) -> FinancialGoal | None:
        params = _draft_params(draft)
        params["goal_id"] = goal_id
        result = await db.execute(_UPDATE_SQL, params)
        row = result.fetchone()
        return _row_to_goal(row) if row else None

    async def delete(self, db: AsyncSession, goal_id: int) -> bool:
        result = await db.execute(_DELETE_SQL, {"goal_id": goal_id})
        return result.fetchone() is not None
