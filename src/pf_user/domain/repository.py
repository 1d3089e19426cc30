"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_user.domain.models import User


class UserRepositoryProtocol(Protocol):
    async def exists(self, db: AsyncSession, user_id: int) -> bool: ...

    async def create(
        self,
        db: AsyncSession,
        name: str,
        email: str,
        password_hash: str,
        preferred_currency: str,
    ) -> User: ...

    async def list_users(self, db: AsyncSession) -> list[User]: ...

    async def get_by_id(self, db: AsyncSession, user_id: int) -> User | None: ...

    async def update(
        self,
        db: AsyncSession,
        user_id: int,
        name: str,
        email: str,
        preferred_currency: str,
    ) -> User | None: ...

    async def delete(self, db: AsyncSession, user_id: int) -> bool: ...

    async def transaction_references(
        self, db: AsyncSession, user_id: int
    ) -> list[tuple[int, int]]: ...
