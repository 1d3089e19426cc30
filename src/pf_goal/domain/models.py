"""Domain models for pf_goal — pure dataclasses."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class FinancialGoal:
    id: int
    user_id: int
    name: str
    target_amount_cents: int
    saved_amount_cents: int
    deadline: date | None
    priority: int
    description: str | None
    created_at: datetime

    @property
    def is_completed(self) -> bool:
        return self.saved_amount_cents >= self.target_amount_cents


@dataclass
class GoalDraft:
    user_id: int
    name: str
    target_amount_cents: int
    saved_amount_cents: int = 0
    deadline: date | None = None
    priority: int = 0
    description: str | None = None
