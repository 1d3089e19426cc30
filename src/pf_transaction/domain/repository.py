"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_transaction.domain.models import (
    IncomeExpenseTotals,
    Transaction,
    TransactionDraft,
)


class TransactionRepositoryProtocol(Protocol):
    # --- reference checks ---
    async def user_exists(self, db: AsyncSession, user_id: int) -> bool: ...

    async def account_exists(
        self, db: AsyncSession, account_id: int, user_id: int
    ) -> bool: ...

    async def category_exists(
        self, db: AsyncSession, category_id: int, user_id: int
    ) -> bool: ...

    # --- writes ---
    async def create(self, db: AsyncSession, draft: TransactionDraft) -> Transaction: ...

    async def update(
        self, db: AsyncSession, transaction_id: int, draft: TransactionDraft
    ) -> Transaction | None: ...

    async def delete(self, db: AsyncSession, transaction_id: int) -> Transaction | None: ...

    # --- reads ---
    async def get_by_id(self, db: AsyncSession, transaction_id: int) -> Transaction | None: ...

    async def list_by_user(self, db: AsyncSession, user_id: int) -> list[Transaction]: ...

    async def list_by_account(self, db: AsyncSession, account_id: int) -> list[Transaction]: ...

    async def list_by_category(self, db: AsyncSession, category_id: int) -> list[Transaction]: ...

    async def totals_by_type(self, db: AsyncSession, user_id: int) -> IncomeExpenseTotals: ...
