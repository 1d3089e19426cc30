"""AccountRepository — raw text() SQL over the accounts table."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_account.domain.models import Account

_COLUMNS = "id, user_id, name, balance_cents, currency, type, created_at"

_INSERT_SQL = text(f"""
    INSERT INTO accounts (user_id, name, balance_cents, currency, type)
    VALUES (:user_id, :name, :balance_cents, :currency, :type)
    RETURNING {_COLUMNS}
""")

_LIST_BY_USER_SQL = text(f"""
    SELECT {_COLUMNS} FROM accounts WHERE user_id = :user_id ORDER BY id
""")

_GET_SQL = text(f"SELECT {_COLUMNS} FROM accounts WHERE id = :account_id")

_UPDATE_SQL = text(f"""
    UPDATE accounts
    SET name = :name, balance_cents = :balance_cents, currency = :currency, type = :type
    WHERE id = :account_id
    RETURNING {_COLUMNS}
""")

_DELETE_SQL = text("DELETE FROM accounts WHERE id = :account_id RETURNING id")

_CATEGORY_IDS_SQL = text(
    "SELECT DISTINCT category_id FROM transactions WHERE account_id = :account_id"
)


def _row_to_account(row: object) -> Account:
    return Account(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        balance_cents=row.balance_cents,  # type: ignore[attr-defined]
        currency=row.currency,  # type: ignore[attr-defined]
        type=row.type,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class AccountRepository:
    async def create(
        self,
        db: AsyncSession,
        user_id: int,
        name: str,
        balance_cents: int,
        currency: str,
        account_type: str,
    ) -> Account:
        result = await db.execute(
            _INSERT_SQL,
            {
                "user_id": user_id,
                "name": name,
                "balance_cents": balance_cents,
                "currency": currency,
                "type": account_type,
            },
        )
        return _row_to_account(result.fetchone())

    async def list_by_user(self, db: AsyncSession, user_id: int) -> list[Account]:
        result = await db.execute(_LIST_BY_USER_SQL, {"user_id": user_id})
        return [_row_to_account(row) for row in result.fetchall()]

    async def get_by_id(self, db: AsyncSession, account_id: int) -> Account | None:
        result = await db.execute(_GET_SQL, {"account_id": account_id})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def update(
        self,
        db: AsyncSession,
        account_id: int,
        name: str,
        balance_cents: int,
        currency: str,
        account_type: str,
    ) -> Account | None:
        result = await db.execute(
            _UPDATE_SQL,
            {
                "account_id": account_id,
                "name": name,
                "balance_cents": balance_cents,
                "currency": currency,
                "type": account_type,
            },
        )
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def delete(self, db: AsyncSession, account_id: int) -> bool:
        result = await db.execute(_DELETE_SQL, {"account_id": account_id})
        return result.fetchone() is not None

    async def category_ids_with_transactions(
        self, db: AsyncSession, account_id: int
    ) -> list[int]:
        """Categories whose listings include rows on this account."""
        result = await db.execute(_CATEGORY_IDS_SQL, {"account_id": account_id})
        return [row.category_id for row in result.fetchall()]
