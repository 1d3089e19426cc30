"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_category.domain.models import Category


class CategoryRepositoryProtocol(Protocol):
    async def create(
        self, db: AsyncSession, user_id: int, name: str, category_type: str
    ) -> Category: ...

    async def list_by_user(self, db: AsyncSession, user_id: int) -> list[Category]: ...

    async def get_by_id(self, db: AsyncSession, category_id: int) -> Category | None: ...

    async def update(
        self, db: AsyncSession, category_id: int, name: str, category_type: str
    ) -> Category | None: ...

    async def delete(self, db: AsyncSession, category_id: int) -> bool: ...

    async def account_ids_with_transactions(
        self, db: AsyncSession, category_id: int
    ) -> list[int]: ...
