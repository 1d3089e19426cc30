"""UserRepository — raw text() SQL over the users table.

Transaction ownership: the application service commits/rolls back.
"""

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.errors import EmailExistsError
from src.pf_user.domain.models import User

_COLUMNS = "id, name, email, password_hash, preferred_currency, created_at"

_EXISTS_SQL = text("SELECT EXISTS (SELECT 1 FROM users WHERE id = :user_id)")

_INSERT_SQL = text(f"""
    INSERT INTO users (name, email, password_hash, preferred_currency)
    VALUES (:name, :email, :password_hash, :preferred_currency)
    RETURNING {_COLUMNS}
""")

_LIST_SQL = text(f"SELECT {_COLUMNS} FROM users ORDER BY id")

_GET_SQL = text(f"SELECT {_COLUMNS} FROM users WHERE id = :user_id")

_UPDATE_SQL = text(f"""
    UPDATE users
    SET name = :name, email = :email, preferred_currency = :preferred_currency
    WHERE id = :user_id
    RETURNING {_COLUMNS}
""")

_DELETE_SQL = text("DELETE FROM users WHERE id = :user_id RETURNING id")

_TRANSACTION_REFS_SQL = text(
    "SELECT DISTINCT account_id, category_id FROM transactions WHERE user_id = :user_id"
)


def _row_to_user(row: object) -> User:
    return User(
        id=row.id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        email=row.email,  # type: ignore[attr-defined]
        password_hash=row.password_hash,  # type: ignore[attr-defined]
        preferred_currency=row.preferred_currency,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


def _is_email_conflict(exc: IntegrityError) -> bool:
    return "uq_users_email" in str(exc.orig)


class UserRepository:
    async def exists(self, db: AsyncSession, user_id: int) -> bool:
        result = await db.execute(_EXISTS_SQL, {"user_id": user_id})
        return bool(result.scalar())

    async def create(
        self,
        db: AsyncSession,
        name: str,
        email: str,
        password_hash: str,
        preferred_currency: str,
    ) -> User:
        try:
            result = await db.execute(
                _INSERT_SQL,
                {
                    "name": name,
                    "email": email,
                    "password_hash": password_hash,
                    "preferred_currency": preferred_currency,
                },
            )
        except IntegrityError as exc:
            if _is_email_conflict(exc):
                raise EmailExistsError() from exc
            raise
        return _row_to_user(result.fetchone())

    async def list_users(self, db: AsyncSession) -> list[User]:
        result = await db.execute(_LIST_SQL)
        return [_row_to_user(row) for row in result.fetchall()]

    async def get_by_id(self, db: AsyncSession, user_id: int) -> User | None:
        result = await db.execute(_GET_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_user(row) if row else None

    async def update(
        self,
        db: AsyncSession,
        user_id: int,
        name: str,
        email: str,
        preferred_currency: str,
    ) -> User | None:
        try:
            result = await db.execute(
                _UPDATE_SQL,
                {
                    "user_id": user_id,
                    "name": name,
                    "email": email,
                    "preferred_currency": preferred_currency,
                },
            )
        except IntegrityError as exc:
            if _is_email_conflict(exc):
                raise EmailExistsError() from exc
            raise
        row = result.fetchone()
        return _row_to_user(row) if row else None

    async def delete(self, db: AsyncSession, user_id: int) -> bool:
        result = await db.execute(_DELETE_SQL, {"user_id": user_id})
        return result.fetchone() is not None

    async def transaction_references(
        self, db: AsyncSession, user_id: int
    ) -> list[tuple[int, int]]:
        """(account_id, category_id) pairs the user's transactions are filed under."""
        result = await db.execute(_TRANSACTION_REFS_SQL, {"user_id": user_id})
        return [(row.account_id, row.category_id) for row in result.fetchall()]
