"""Pydantic schemas for pf_goal."""

from datetime import date

from pydantic import BaseModel, Field

from src.pf_common.cents import cents_to_display, percent_of
from src.pf_common.datetime_utils import iso_or_none
from src.pf_goal.domain.models import FinancialGoal


class GoalRequest(BaseModel):
    """Body for both create and full update."""

    name: str = Field(..., min_length=1, max_length=128)
    target_amount_cents: int = Field(..., gt=0)
    saved_amount_cents: int = Field(0, ge=0)
    deadline: date | None = None
    priority: int = Field(0, ge=0, le=10)
    description: str | None = Field(None, max_length=1000)


class GoalResponse(BaseModel):
    id: int
    user_id: int
    name: str
    target_amount_cents: int
    target_display: str
    saved_amount_cents: int
    saved_display: str
    deadline: str | None
    priority: int
    description: str | None
    created_at: str

    @classmethod
    def from_domain(cls, g: FinancialGoal) -> "GoalResponse":
        return cls(
            id=g.id,
            user_id=g.user_id,
            name=g.name,
            target_amount_cents=g.target_amount_cents,
            target_display=cents_to_display(g.target_amount_cents),
            saved_amount_cents=g.saved_amount_cents,
            saved_display=cents_to_display(g.saved_amount_cents),
            deadline=iso_or_none(g.deadline),
            priority=g.priority,
            description=g.description,
            created_at=g.created_at.isoformat(),
        )


class GoalProgressResponse(BaseModel):
    """progress = saved * 100 / target, in percent (may exceed 100)."""

    id: int
    name: str
    target_amount_cents: int
    saved_amount_cents: int
    progress: float
    completed: bool

    @classmethod
    def from_domain(cls, g: FinancialGoal) -> "GoalProgressResponse":
        return cls(
            id=g.id,
            name=g.name,
            target_amount_cents=g.target_amount_cents,
            saved_amount_cents=g.saved_amount_cents,
            progress=percent_of(g.saved_amount_cents, g.target_amount_cents),
            completed=g.is_completed,
        )
