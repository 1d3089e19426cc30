"""CategoryApplicationService — CRUD scoped to the calling user.

Deleting a category cascades to its transactions; the cached listings of the
category, the user and the accounts those rows were on are dropped afterwards.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_category.application.schemas import CategoryRequest, CategoryResponse
from src.pf_category.domain.models import Category
from src.pf_category.domain.repository import CategoryRepositoryProtocol
from src.pf_category.infrastructure.persistence import CategoryRepository
from src.pf_common.cache import (
    TRANSACTIONS_BY_ACCOUNT,
    TRANSACTIONS_BY_CATEGORY,
    TRANSACTIONS_BY_USER,
    CacheAsideStore,
    cache_key,
)
from src.pf_common.database import store_errors, unit_of_work
from src.pf_common.errors import CategoryNotFoundError


class CategoryApplicationService:
    def __init__(
        self,
        repo: CategoryRepositoryProtocol | None = None,
        cache: CacheAsideStore | None = None,
    ) -> None:
        self._repo: CategoryRepositoryProtocol = repo or CategoryRepository()
        self._cache = cache or CacheAsideStore(None)

    async def create_category(
        self, db: AsyncSession, user_id: int, req: CategoryRequest
    ) -> CategoryResponse:
        async with unit_of_work(db):
            category = await self._repo.create(db, user_id, req.name, req.type.value)
        return CategoryResponse.from_domain(category)

    async def list_categories(self, db: AsyncSession, user_id: int) -> list[CategoryResponse]:
        with store_errors():
            categories = await self._repo.list_by_user(db, user_id)
        return [CategoryResponse.from_domain(c) for c in categories]

    async def get_category(
        self, db: AsyncSession, user_id: int, category_id: int
    ) -> CategoryResponse:
        with store_errors():
            category = await self._owned(db, user_id, category_id)
        return CategoryResponse.from_domain(category)

    async def update_category(
        self, db: AsyncSession, user_id: int, category_id: int, req: CategoryRequest
    ) -> CategoryResponse:
        async with unit_of_work(db):
            await self._owned(db, user_id, category_id)
            category = await self._repo.update(db, category_id, req.name, req.type.value)
            if category is None:
                raise CategoryNotFoundError(category_id)
        return CategoryResponse.from_domain(category)

    async def delete_category(self, db: AsyncSession, user_id: int, category_id: int) -> None:
        async with unit_of_work(db):
            await self._owned(db, user_id, category_id)
            account_ids = await self._repo.account_ids_with_transactions(db, category_id)
            if not await self._repo.delete(db, category_id):
                raise CategoryNotFoundError(category_id)
        await self._cache.invalidate(
            cache_key(TRANSACTIONS_BY_CATEGORY, category_id),
            cache_key(TRANSACTIONS_BY_USER, user_id),
            *(cache_key(TRANSACTIONS_BY_ACCOUNT, aid) for aid in account_ids),
        )

    async def _owned(self, db: AsyncSession, user_id: int, category_id: int) -> Category:
        category = await self._repo.get_by_id(db, category_id)
        if category is None or category.user_id != user_id:
            raise CategoryNotFoundError(category_id)
        return category
