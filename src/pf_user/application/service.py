"""UserApplicationService — CRUD over users.

Creation stores a bcrypt hash; no token is issued here. Deleting a user
cascades to everything the user owns, so the user's cached transaction
listings (by user, account and category) are dropped after commit.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.cache import (
    TRANSACTIONS_BY_ACCOUNT,
    TRANSACTIONS_BY_CATEGORY,
    TRANSACTIONS_BY_USER,
    CacheAsideStore,
    cache_key,
)
from src.pf_common.database import store_errors, unit_of_work
from src.pf_common.errors import UserNotFoundError
from src.pf_gateway.auth.password import hash_password
from src.pf_user.application.schemas import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
)
from src.pf_user.domain.repository import UserRepositoryProtocol
from src.pf_user.infrastructure.persistence import UserRepository


class UserApplicationService:
    def __init__(
        self,
        repo: UserRepositoryProtocol | None = None,
        cache: CacheAsideStore | None = None,
    ) -> None:
        self._repo: UserRepositoryProtocol = repo or UserRepository()
        self._cache = cache or CacheAsideStore(None)

    async def create_user(self, db: AsyncSession, req: CreateUserRequest) -> UserResponse:
        async with unit_of_work(db):
            user = await self._repo.create(
                db,
                name=req.name,
                email=req.email.lower(),
                password_hash=hash_password(req.password),
                preferred_currency=req.preferred_currency,
            )
        return UserResponse.from_domain(user)

    async def list_users(self, db: AsyncSession) -> list[UserResponse]:
        with store_errors():
            users = await self._repo.list_users(db)
        return [UserResponse.from_domain(u) for u in users]

    async def get_user(self, db: AsyncSession, user_id: int) -> UserResponse:
        with store_errors():
            user = await self._repo.get_by_id(db, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return UserResponse.from_domain(user)

    async def update_user(
        self, db: AsyncSession, user_id: int, req: UpdateUserRequest
    ) -> UserResponse:
        async with unit_of_work(db):
            user = await self._repo.update(
                db,
                user_id,
                name=req.name,
                email=req.email.lower(),
                preferred_currency=req.preferred_currency,
            )
            if user is None:
                raise UserNotFoundError(user_id)
        return UserResponse.from_domain(user)

    async def delete_user(self, db: AsyncSession, user_id: int) -> None:
        async with unit_of_work(db):
            references = await self._repo.transaction_references(db, user_id)
            if not await self._repo.delete(db, user_id):
                raise UserNotFoundError(user_id)
        keys = [cache_key(TRANSACTIONS_BY_USER, user_id)]
        for account_id, category_id in references:
            keys.append(cache_key(TRANSACTIONS_BY_ACCOUNT, account_id))
            keys.append(cache_key(TRANSACTIONS_BY_CATEGORY, category_id))
        await self._cache.invalidate(*dict.fromkeys(keys))
