"""Pydantic schemas for pf_account."""

from pydantic import BaseModel, Field

from src.pf_account.domain.models import Account
from src.pf_common.cents import cents_to_display


class AccountRequest(BaseModel):
    """Body for both create and full update."""

    name: str = Field(..., min_length=1, max_length=128)
    balance_cents: int = Field(0, description="Opening / current balance in cents")
    currency: str = Field("USD", pattern=r"^[A-Z]{3}$")
    type: str = Field(..., min_length=1, max_length=32)


class AccountResponse(BaseModel):
    id: int
    user_id: int
    name: str
    balance_cents: int
    balance_display: str
    currency: str
    type: str
    created_at: str

    @classmethod
    def from_domain(cls, a: Account) -> "AccountResponse":
        return cls(
            id=a.id,
            user_id=a.user_id,
            name=a.name,
            balance_cents=a.balance_cents,
            balance_display=cents_to_display(a.balance_cents),
            currency=a.currency,
            type=a.type,
            created_at=a.created_at.isoformat(),
        )
