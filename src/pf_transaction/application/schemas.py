"""Pydantic request/response schemas for pf_transaction.

Amounts are positive integer cents; `type` carries the direction.
"""

from pydantic import BaseModel, Field

from src.pf_common.cents import cents_to_display
from src.pf_common.enums import EntryType
from src.pf_transaction.domain.models import IncomeExpenseTotals, Transaction


class TransactionRequest(BaseModel):
    """Body for both create and full update. The owner is the caller."""

    account_id: int = Field(..., gt=0)
    category_id: int = Field(..., gt=0)
    amount_cents: int = Field(..., gt=0, description="Positive amount in cents")
    currency: str = Field("USD", pattern=r"^[A-Z]{3}$")
    type: EntryType
    description: str | None = Field(None, max_length=500)


class TransactionResponse(BaseModel):
    id: int
    user_id: int
    account_id: int
    category_id: int
    amount_cents: int
    amount_display: str
    currency: str
    type: str
    description: str | None
    created_at: str

    @classmethod
    def from_domain(cls, t: Transaction) -> "TransactionResponse":
        return cls(
            id=t.id,
            user_id=t.user_id,
            account_id=t.account_id,
            category_id=t.category_id,
            amount_cents=t.amount_cents,
            amount_display=cents_to_display(t.amount_cents),
            currency=t.currency,
            type=t.type,
            description=t.description,
            created_at=t.created_at.isoformat(),
        )


class CompareResponse(BaseModel):
    """Income vs expenses over all of the caller's transactions, in cents."""

    income: int
    expense: int
    net: int
    income_display: str
    expense_display: str
    net_display: str

    @classmethod
    def from_domain(cls, totals: IncomeExpenseTotals) -> "CompareResponse":
        return cls(
            income=totals.income_cents,
            expense=totals.expense_cents,
            net=totals.net_cents,
            income_display=cents_to_display(totals.income_cents),
            expense_display=cents_to_display(totals.expense_cents),
            net_display=cents_to_display(totals.net_cents),
        )
