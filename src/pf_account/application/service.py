"""AccountApplicationService — CRUD scoped to the calling user.

An account owned by someone else is reported as not found. Deleting an
account cascades to its transactions, so the cached listings of the account,
the user and every category those transactions were filed under are dropped
afterwards.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_account.application.schemas import AccountRequest, AccountResponse
from src.pf_account.domain.models import Account
from src.pf_account.domain.repository import AccountRepositoryProtocol
from src.pf_account.infrastructure.persistence import AccountRepository
from src.pf_common.cache import (
    TRANSACTIONS_BY_ACCOUNT,
    TRANSACTIONS_BY_CATEGORY,
    TRANSACTIONS_BY_USER,
    CacheAsideStore,
    cache_key,
)
from src.pf_common.database import store_errors, unit_of_work
from src.pf_common.errors import AccountNotFoundError


class AccountApplicationService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol | None = None,
        cache: CacheAsideStore | None = None,
    ) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()
        self._cache = cache or CacheAsideStore(None)

    async def create_account(
        self, db: AsyncSession, user_id: int, req: AccountRequest
    ) -> AccountResponse:
        async with unit_of_work(db):
            account = await self._repo.create(
                db,
                user_id=user_id,
                name=req.name,
                balance_cents=req.balance_cents,
                currency=req.currency,
                account_type=req.type,
            )
        return AccountResponse.from_domain(account)

    async def list_accounts(self, db: AsyncSession, user_id: int) -> list[AccountResponse]:
        with store_errors():
            accounts = await self._repo.list_by_user(db, user_id)
        return [AccountResponse.from_domain(a) for a in accounts]

    async def get_account(
        self, db: AsyncSession, user_id: int, account_id: int
    ) -> AccountResponse:
        with store_errors():
            account = await self._owned(db, user_id, account_id)
        return AccountResponse.from_domain(account)

    async def update_account(
        self, db: AsyncSession, user_id: int, account_id: int, req: AccountRequest
    ) -> AccountResponse:
        async with unit_of_work(db):
            await self._owned(db, user_id, account_id)
            account = await self._repo.update(
                db,
                account_id,
                name=req.name,
                balance_cents=req.balance_cents,
                currency=req.currency,
                account_type=req.type,
            )
            if account is None:
                raise AccountNotFoundError(account_id)
        return AccountResponse.from_domain(account)

    async def delete_account(self, db: AsyncSession, user_id: int, account_id: int) -> None:
        async with unit_of_work(db):
            await self._owned(db, user_id, account_id)
            # Collected before the cascade removes the rows.
            category_ids = await self._repo.category_ids_with_transactions(db, account_id)
            if not await self._repo.delete(db, account_id):
                raise AccountNotFoundError(account_id)
        await self._cache.invalidate(
            cache_key(TRANSACTIONS_BY_ACCOUNT, account_id),
            cache_key(TRANSACTIONS_BY_USER, user_id),
            *(cache_key(TRANSACTIONS_BY_CATEGORY, cid) for cid in category_ids),
        )

    async def _owned(self, db: AsyncSession, user_id: int, account_id: int) -> Account:
        account = await self._repo.get_by_id(db, account_id)
        if account is None or account.user_id != user_id:
            raise AccountNotFoundError(account_id)
        return account
