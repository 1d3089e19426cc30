"""Domain models for pf_category — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Category:
    id: int
    user_id: int
    name: str
    type: str  # EntryType value: "income" | "expense"
    created_at: datetime
