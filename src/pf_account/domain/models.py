"""Domain models for pf_account — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Account:
    id: int
    user_id: int
    name: str
    balance_cents: int
    currency: str
    type: str  # free-form: "checking", "savings", "cash", ...
    created_at: datetime
