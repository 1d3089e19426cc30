"""Unit tests for CategoryApplicationService using a mock repository."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from src.pf_category.application.schemas import CategoryRequest
from src.pf_category.application.service import CategoryApplicationService
from src.pf_category.domain.models import Category
from src.pf_common.cache import CacheAsideStore
from src.pf_common.enums import EntryType
from src.pf_common.errors import CategoryNotFoundError


def _make_category(category_id: int = 7, user_id: int = 1) -> Category:
    return Category(
        id=category_id,
        user_id=user_id,
        name="Groceries",
        type="expense",
        created_at=datetime.now(UTC),
    )


class TestCategoryRequest:
    def test_accepts_income_and_expense(self) -> None:
        assert CategoryRequest(name="Salary", type="income").type is EntryType.INCOME
        assert CategoryRequest(name="Rent", type="expense").type is EntryType.EXPENSE

    def test_rejects_unknown_type(self) -> None:
        with pytest.raises(ValidationError):
            CategoryRequest(name="Misc", type="transfer")


class TestCategoryService:
    async def test_create_passes_enum_value(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.create.return_value = _make_category()
        svc = CategoryApplicationService(repo=mock_repo)

        result = await svc.create_category(
            AsyncMock(), 1, CategoryRequest(name="Groceries", type=EntryType.EXPENSE)
        )

        assert result.type == "expense"
        assert mock_repo.create.call_args.args[1:] == (1, "Groceries", "expense")

    async def test_other_users_category_is_not_found(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = _make_category(user_id=2)
        svc = CategoryApplicationService(repo=mock_repo)

        with pytest.raises(CategoryNotFoundError):
            await svc.get_category(MagicMock(), 1, 7)

    async def test_update_missing_category(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = None
        svc = CategoryApplicationService(repo=mock_repo)

        with pytest.raises(CategoryNotFoundError):
            await svc.update_category(
                AsyncMock(), 1, 7, CategoryRequest(name="Food", type=EntryType.EXPENSE)
            )
        mock_repo.update.assert_not_awaited()

    async def test_delete_invalidates_category_and_user_listings(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = _make_category()
        mock_repo.account_ids_with_transactions.return_value = []
        mock_repo.delete.return_value = True
        cache = AsyncMock()
        svc = CategoryApplicationService(repo=mock_repo, cache=cache)

        await svc.delete_category(AsyncMock(), 1, 7)

        cache.invalidate.assert_awaited_once_with(
            "transactions:category:7", "transactions:user:1"
        )

    async def test_delete_drops_account_listings_of_cascaded_rows(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = _make_category()
        mock_repo.account_ids_with_transactions.return_value = [3, 4]
        mock_repo.delete.return_value = True
        redis = AsyncMock()
        svc = CategoryApplicationService(repo=mock_repo, cache=CacheAsideStore(redis))

        await svc.delete_category(AsyncMock(), 1, 7)

        redis.delete.assert_awaited_once_with(
            "transactions:category:7",
            "transactions:user:1",
            "transactions:account:3",
            "transactions:account:4",
        )
        mock_repo.account_ids_with_transactions.assert_awaited_once()
