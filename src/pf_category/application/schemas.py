"""Pydantic schemas for pf_category."""

from pydantic import BaseModel, Field

from src.pf_category.domain.models import Category
from src.pf_common.enums import EntryType


class CategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    type: EntryType


class CategoryResponse(BaseModel):
    id: int
    user_id: int
    name: str
    type: str
    created_at: str

    @classmethod
    def from_domain(cls, c: Category) -> "CategoryResponse":
        return cls(
            id=c.id,
            user_id=c.user_id,
            name=c.name,
            type=c.type,
            created_at=c.created_at.isoformat(),
        )
