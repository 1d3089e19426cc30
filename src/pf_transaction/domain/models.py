"""Domain models for pf_transaction — pure dataclasses.

Transaction lists are cached as JSON, so every field must round-trip through
pydantic (ints, strs, aware datetimes).
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Transaction:
    id: int
    user_id: int
    account_id: int
    category_id: int
    amount_cents: int  # always positive; direction comes from `type`
    currency: str
    type: str  # EntryType value: "income" | "expense"
    description: str | None
    created_at: datetime


@dataclass
class TransactionDraft:
    """Fields written by create/update. id and created_at come from the DB."""

    user_id: int
    account_id: int
    category_id: int
    amount_cents: int
    currency: str
    type: str
    description: str | None = None


@dataclass
class IncomeExpenseTotals:
    income_cents: int = 0
    expense_cents: int = 0

    @property
    def net_cents(self) -> int:
        return self.income_cents - self.expense_cents
