"""Domain models for pf_user — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    id: int
    name: str
    email: str
    password_hash: str
    preferred_currency: str
    created_at: datetime
