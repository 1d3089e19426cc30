"""Pydantic request/response schemas for pf_user.

password_hash never leaves the service.
"""

from pydantic import BaseModel, Field

from src.pf_user.domain.models import User

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
_CURRENCY_PATTERN = r"^[A-Z]{3}$"


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: str = Field(..., max_length=255, pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)
    preferred_currency: str = Field("USD", pattern=_CURRENCY_PATTERN)


class UpdateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: str = Field(..., max_length=255, pattern=_EMAIL_PATTERN)
    preferred_currency: str = Field("USD", pattern=_CURRENCY_PATTERN)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    preferred_currency: str
    created_at: str

    @classmethod
    def from_domain(cls, u: User) -> "UserResponse":
        return cls(
            id=u.id,
            name=u.name,
            email=u.email,
            preferred_currency=u.preferred_currency,
            created_at=u.created_at.isoformat(),
        )
