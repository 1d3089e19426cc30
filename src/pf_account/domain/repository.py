"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_account.domain.models import Account


class AccountRepositoryProtocol(Protocol):
    async def create(
        self,
        db: AsyncSession,
        user_id: int,
        name: str,
        balance_cents: int,
        currency: str,
        account_type: str,
    ) -> Account: ...

    async def list_by_user(self, db: AsyncSession, user_id: int) -> list[Account]: ...

    async def get_by_id(self, db: AsyncSession, account_id: int) -> Account | None: ...

    async def update(
        self,
        db: AsyncSession,
        account_id: int,
        name: str,
        balance_cents: int,
        currency: str,
        account_type: str,
    ) -> Account | None: ...

    async def delete(self, db: AsyncSession, account_id: int) -> bool: ...

    async def category_ids_with_transactions(
        self, db: AsyncSession, account_id: int
    ) -> list[int]: ...
