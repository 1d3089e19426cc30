"""TransactionApplicationService — writes with reference checks, cached reads.

Create / update:
  1. user, account, category existence checks, in that order, inside the
     same DB transaction as the write; the first missing one raises
     ReferenceNotFoundError and nothing is written
  2. insert / update (FK violations also surface as ReferenceNotFoundError)
  3. commit, then drop the cached listings the row appears in

Listings by user, account and category go through CacheAsideStore. Account and
category listings first confirm the caller owns the account/category (404
otherwise); a cached listing is still filtered to the caller's rows.
"""

from collections.abc import Awaitable, Callable

from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.cache import (
    TRANSACTIONS_BY_ACCOUNT,
    TRANSACTIONS_BY_CATEGORY,
    TRANSACTIONS_BY_USER,
    CacheAsideStore,
    cache_key,
)
from src.pf_common.database import store_errors, unit_of_work
from src.pf_common.errors import (
    AccountNotFoundError,
    CategoryNotFoundError,
    ReferenceNotFoundError,
    TransactionNotFoundError,
)
from src.pf_transaction.application.schemas import (
    CompareResponse,
    TransactionRequest,
    TransactionResponse,
)
from src.pf_transaction.domain.models import Transaction, TransactionDraft
from src.pf_transaction.domain.repository import TransactionRepositoryProtocol
from src.pf_transaction.infrastructure.persistence import TransactionRepository

_TRANSACTION_LIST: TypeAdapter[list[Transaction]] = TypeAdapter(list[Transaction])


def _listing_keys(t: Transaction) -> list[str]:
    return [
        cache_key(TRANSACTIONS_BY_USER, t.user_id),
        cache_key(TRANSACTIONS_BY_ACCOUNT, t.account_id),
        cache_key(TRANSACTIONS_BY_CATEGORY, t.category_id),
    ]


def _draft(user_id: int, req: TransactionRequest) -> TransactionDraft:
    return TransactionDraft(
        user_id=user_id,
        account_id=req.account_id,
        category_id=req.category_id,
        amount_cents=req.amount_cents,
        currency=req.currency,
        type=req.type.value,
        description=req.description,
    )


class TransactionApplicationService:
    def __init__(
        self,
        repo: TransactionRepositoryProtocol | None = None,
        cache: CacheAsideStore | None = None,
    ) -> None:
        self._repo: TransactionRepositoryProtocol = repo or TransactionRepository()
        self._cache = cache or CacheAsideStore(None)

    # --- writes ---

    async def create_transaction(
        self, db: AsyncSession, user_id: int, req: TransactionRequest
    ) -> TransactionResponse:
        draft = _draft(user_id, req)
        async with unit_of_work(db):
            await self._check_references(db, draft)
            transaction = await self._repo.create(db, draft)
        await self._cache.invalidate(*_listing_keys(transaction))
        return TransactionResponse.from_domain(transaction)

    async def update_transaction(
        self,
        db: AsyncSession,
        user_id: int,
        transaction_id: int,
        req: TransactionRequest,
    ) -> TransactionResponse:
        draft = _draft(user_id, req)
        async with unit_of_work(db):
            previous = await self._owned(db, user_id, transaction_id)
            await self._check_references(db, draft)
            transaction = await self._repo.update(db, transaction_id, draft)
            if transaction is None:
                raise TransactionNotFoundError(transaction_id)
        # Moving a row between accounts/categories stales both sides.
        keys = dict.fromkeys(_listing_keys(previous) + _listing_keys(transaction))
        await self._cache.invalidate(*keys)
        return TransactionResponse.from_domain(transaction)

    async def delete_transaction(
        self, db: AsyncSession, user_id: int, transaction_id: int
    ) -> None:
        async with unit_of_work(db):
            await self._owned(db, user_id, transaction_id)
            deleted = await self._repo.delete(db, transaction_id)
            if deleted is None:
                raise TransactionNotFoundError(transaction_id)
        await self._cache.invalidate(*_listing_keys(deleted))

    # --- reads ---

    async def get_transaction(
        self, db: AsyncSession, user_id: int, transaction_id: int
    ) -> TransactionResponse:
        with store_errors():
            transaction = await self._owned(db, user_id, transaction_id)
        return TransactionResponse.from_domain(transaction)

    async def list_for_user(self, db: AsyncSession, user_id: int) -> list[TransactionResponse]:
        transactions = await self._cached_list(
            cache_key(TRANSACTIONS_BY_USER, user_id), self._repo.list_by_user, db, user_id
        )
        return [TransactionResponse.from_domain(t) for t in transactions]

    async def list_by_account(
        self, db: AsyncSession, user_id: int, account_id: int
    ) -> list[TransactionResponse]:
        with store_errors():
            if not await self._repo.account_exists(db, account_id, user_id):
                raise AccountNotFoundError(account_id)
        transactions = await self._cached_list(
            cache_key(TRANSACTIONS_BY_ACCOUNT, account_id),
            self._repo.list_by_account,
            db,
            account_id,
        )
        return [TransactionResponse.from_domain(t) for t in transactions if t.user_id == user_id]

    async def list_by_category(
        self, db: AsyncSession, user_id: int, category_id: int
    ) -> list[TransactionResponse]:
        with store_errors():
            if not await self._repo.category_exists(db, category_id, user_id):
                raise CategoryNotFoundError(category_id)
        transactions = await self._cached_list(
            cache_key(TRANSACTIONS_BY_CATEGORY, category_id),
            self._repo.list_by_category,
            db,
            category_id,
        )
        return [TransactionResponse.from_domain(t) for t in transactions if t.user_id == user_id]

    async def compare_income_expenses(self, db: AsyncSession, user_id: int) -> CompareResponse:
        with store_errors():
            totals = await self._repo.totals_by_type(db, user_id)
        return CompareResponse.from_domain(totals)

    # --- helpers ---

    async def _check_references(self, db: AsyncSession, draft: TransactionDraft) -> None:
        if not await self._repo.user_exists(db, draft.user_id):
            raise ReferenceNotFoundError("user", draft.user_id)
        if not await self._repo.account_exists(db, draft.account_id, draft.user_id):
            raise ReferenceNotFoundError("account", draft.account_id)
        if not await self._repo.category_exists(db, draft.category_id, draft.user_id):
            raise ReferenceNotFoundError("category", draft.category_id)

    async def _owned(
        self, db: AsyncSession, user_id: int, transaction_id: int
    ) -> Transaction:
        transaction = await self._repo.get_by_id(db, transaction_id)
        if transaction is None or transaction.user_id != user_id:
            raise TransactionNotFoundError(transaction_id)
        return transaction

    async def _cached_list(
        self,
        key: str,
        query: Callable[[AsyncSession, int], Awaitable[list[Transaction]]],
        db: AsyncSession,
        param: int,
    ) -> list[Transaction]:
        async def load() -> list[Transaction]:
            with store_errors():
                return await query(db, param)

        return await self._cache.fetch(key, load, _TRANSACTION_LIST)
