"""Unit tests for AccountApplicationService using a mock repository."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pf_account.application.schemas import AccountRequest, AccountResponse
from src.pf_account.application.service import AccountApplicationService
from src.pf_account.domain.models import Account
from src.pf_common.errors import AccountNotFoundError


def _make_account(account_id: int = 3, user_id: int = 1, balance: int = 150000) -> Account:
    return Account(
        id=account_id,
        user_id=user_id,
        name="Checking",
        balance_cents=balance,
        currency="USD",
        type="checking",
        created_at=datetime.now(UTC),
    )


def _request(balance: int = 150000) -> AccountRequest:
    return AccountRequest(name="Checking", balance_cents=balance, currency="USD", type="checking")


class TestCreateAccount:
    async def test_returns_account_response(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.create.return_value = _make_account()
        svc = AccountApplicationService(repo=mock_repo)
        db = AsyncMock()

        result = await svc.create_account(db, 1, _request())

        assert isinstance(result, AccountResponse)
        assert result.balance_cents == 150000
        assert result.balance_display == "1,500.00"
        assert mock_repo.create.call_args.kwargs["account_type"] == "checking"
        db.commit.assert_awaited_once()


class TestGetAccount:
    async def test_owned_account(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = _make_account()
        svc = AccountApplicationService(repo=mock_repo)

        result = await svc.get_account(MagicMock(), 1, 3)

        assert result.id == 3

    async def test_other_users_account_is_not_found(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = _make_account(user_id=2)
        svc = AccountApplicationService(repo=mock_repo)

        with pytest.raises(AccountNotFoundError):
            await svc.get_account(MagicMock(), 1, 3)

    async def test_missing_account(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = None
        svc = AccountApplicationService(repo=mock_repo)

        with pytest.raises(AccountNotFoundError) as exc_info:
            await svc.get_account(MagicMock(), 1, 404)
        assert exc_info.value.http_status == 404


class TestUpdateAccount:
    async def test_updates_owned_account(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = _make_account()
        mock_repo.update.return_value = _make_account(balance=-1200)
        svc = AccountApplicationService(repo=mock_repo)

        result = await svc.update_account(AsyncMock(), 1, 3, _request(balance=-1200))

        assert result.balance_display == "-12.00"


class TestDeleteAccount:
    async def test_invalidates_account_and_user_listings(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = _make_account()
        mock_repo.category_ids_with_transactions.return_value = []
        mock_repo.delete.return_value = True
        cache = AsyncMock()
        svc = AccountApplicationService(repo=mock_repo, cache=cache)

        await svc.delete_account(AsyncMock(), 1, 3)

        cache.invalidate.assert_awaited_once_with(
            "transactions:account:3", "transactions:user:1"
        )

    async def test_invalidates_listings_of_cascaded_categories(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = _make_account()
        order: list[str] = []
        mock_repo.category_ids_with_transactions.side_effect = (
            lambda *_: order.append("collect") or [7, 8]
        )
        mock_repo.delete.side_effect = lambda *_: order.append("delete") or True
        cache = AsyncMock()
        svc = AccountApplicationService(repo=mock_repo, cache=cache)

        await svc.delete_account(AsyncMock(), 1, 3)

        keys = cache.invalidate.await_args.args
        assert "transactions:category:7" in keys
        assert "transactions:category:8" in keys
        # Collected before the cascade removes the rows.
        assert order == ["collect", "delete"]

    async def test_not_found_leaves_cache_alone(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_by_id.return_value = None
        cache = AsyncMock()
        svc = AccountApplicationService(repo=mock_repo, cache=cache)

        with pytest.raises(AccountNotFoundError):
            await svc.delete_account(AsyncMock(), 1, 3)
        cache.invalidate.assert_not_awaited()


class TestListAccounts:
    async def test_lists_callers_accounts(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.list_by_user.return_value = [_make_account(3), _make_account(4)]
        svc = AccountApplicationService(repo=mock_repo)

        result = await svc.list_accounts(MagicMock(), 1)

        assert [a.id for a in result] == [3, 4]
        mock_repo.list_by_user.assert_awaited_once()
