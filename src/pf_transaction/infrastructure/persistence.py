"""TransactionRepository — raw text() SQL over the transactions table.

Reference checks are scoped: an account or category belonging to another user
counts as absent. The foreign keys (fk_transactions_*) back the checks up; an
FK violation at write time is reported as ReferenceNotFoundError, so a row
deleted between check and insert is never silently referenced.

Transaction ownership: the application service commits/rolls back.
"""

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.enums import EntryType
from src.pf_common.errors import ReferenceNotFoundError
from src.pf_transaction.domain.models import (
    IncomeExpenseTotals,
    Transaction,
    TransactionDraft,
)

_COLUMNS = (
    "id, user_id, account_id, category_id, amount_cents, currency, type, "
    "description, created_at"
)

_USER_EXISTS_SQL = text("SELECT EXISTS (SELECT 1 FROM users WHERE id = :user_id)")

_ACCOUNT_EXISTS_SQL = text("""
    SELECT EXISTS (
        SELECT 1 FROM accounts WHERE id = :account_id AND user_id = :user_id
    )
""")

_CATEGORY_EXISTS_SQL = text("""
    SELECT EXISTS (
        SELECT 1 FROM categories WHERE id = :category_id AND user_id = :user_id
    )
""")

_INSERT_SQL = text(f"""
    INSERT INTO transactions
        (user_id, account_id, category_id, amount_cents, currency, type, description)
    VALUES
        (:user_id, :account_id, :category_id, :amount_cents, :currency, :type, :description)
    RETURNING {_COLUMNS}
""")

_UPDATE_SQL = text(f"""
    UPDATE transactions
    SET account_id = :account_id,
        category_id = :category_id,
        amount_cents = :amount_cents,
        currency = :currency,
        type = :type,
        description = :description
    WHERE id = :transaction_id
    RETURNING {_COLUMNS}
""")

_DELETE_SQL = text(f"""
    DELETE FROM transactions WHERE id = :transaction_id RETURNING {_COLUMNS}
""")

_GET_SQL = text(f"SELECT {_COLUMNS} FROM transactions WHERE id = :transaction_id")

_LIST_BY_USER_SQL = text(f"""
    SELECT {_COLUMNS} FROM transactions
    WHERE user_id = :user_id
    ORDER BY created_at DESC, id DESC
""")

_LIST_BY_ACCOUNT_SQL = text(f"""
    SELECT {_COLUMNS} FROM transactions
    WHERE account_id = :account_id
    ORDER BY created_at DESC, id DESC
""")

_LIST_BY_CATEGORY_SQL = text(f"""
    SELECT {_COLUMNS} FROM transactions
    WHERE category_id = :category_id
    ORDER BY created_at DESC, id DESC
""")

_TOTALS_BY_TYPE_SQL = text("""
    SELECT type, COALESCE(SUM(amount_cents), 0) AS total
    FROM transactions
    WHERE user_id = :user_id
    GROUP BY type
""")

# FK constraint name → reference reported to the caller
_FK_REFERENCES = {
    "fk_transactions_user": "user",
    "fk_transactions_account": "account",
    "fk_transactions_category": "category",
}


def _row_to_transaction(row: object) -> Transaction:
    return Transaction(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        account_id=row.account_id,  # type: ignore[attr-defined]
        category_id=row.category_id,  # type: ignore[attr-defined]
        amount_cents=row.amount_cents,  # type: ignore[attr-defined]
        currency=row.currency,  # type: ignore[attr-defined]
        type=row.type,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


def _reference_from_fk(
    exc: IntegrityError, draft: TransactionDraft
) -> ReferenceNotFoundError | None:
    message = str(exc.orig)
    ids = {"user": draft.user_id, "account": draft.account_id, "category": draft.category_id}
    for constraint, reference in _FK_REFERENCES.items():
        if constraint in message:
            return ReferenceNotFoundError(reference, ids[reference])
    return None


def _draft_params(draft: TransactionDraft) -> dict[str, object]:
    return {
        "user_id": draft.user_id,
        "account_id": draft.account_id,
        "category_id": draft.category_id,
        "amount_cents": draft.amount_cents,
        "currency": draft.currency,
        "type": draft.type,
        "description": draft.description,
    }


class TransactionRepository:
    async def user_exists(self, db: AsyncSession, user_id: int) -> bool:
        result = await db.execute(_USER_EXISTS_SQL, {"user_id": user_id})
        return bool(result.scalar())

    async def account_exists(self, db: AsyncSession, account_id: int, user_id: int) -> bool:
        result = await db.execute(
            _ACCOUNT_EXISTS_SQL, {"account_id": account_id, "user_id": user_id}
        )
        return bool(result.scalar())

    async def category_exists(self, db: AsyncSession, category_id: int, user_id: int) -> bool:
        result = await db.execute(
            _CATEGORY_EXISTS_SQL, {"category_id": category_id, "user_id": user_id}
        )
        return bool(result.scalar())

    async def create(self, db: AsyncSession, draft: TransactionDraft) -> Transaction:
        try:
            result = await db.execute(_INSERT_SQL, _draft_params(draft))
        except IntegrityError as exc:
            missing = _reference_from_fk(exc, draft)
            if missing is not None:
                raise missing from exc
            raise
        return _row_to_transaction(result.fetchone())

    async def update(
        self, db: AsyncSession, transaction_id: int, draft: TransactionDraft
    ) -> Transaction | None:
        params = _draft_params(draft)
        params["transaction_id"] = transaction_id
        try:
            result = await db.execute(_UPDATE_SQL, params)
        except IntegrityError as exc:
            missing = _reference_from_fk(exc, draft)
            if missing is not None:
                raise missing from exc
            raise
        row = result.fetchone()
        return _row_to_transaction(row) if row else None

    async def delete(self, db: AsyncSession, transaction_id: int) -> Transaction | None:
        result = await db.execute(_DELETE_SQL, {"transaction_id": transaction_id})
        row = result.fetchone()
        return _row_to_transaction(row) if row else None

    async def get_by_id(self, db: AsyncSession, transaction_id: int) -> Transaction | None:
        result = await db.execute(_GET_SQL, {"transaction_id": transaction_id})
        row = result.fetchone()
        return _row_to_transaction(row) if row else None

    async def list_by_user(self, db: AsyncSession, user_id: int) -> list[Transaction]:
        result = await db.execute(_LIST_BY_USER_SQL, {"user_id": user_id})
        return [_row_to_transaction(row) for row in result.fetchall()]

    async def list_by_account(self, db: AsyncSession, account_id: int) -> list[Transaction]:
        result = await db.execute(_LIST_BY_ACCOUNT_SQL, {"account_id": account_id})
        return [_row_to_transaction(row) for row in result.fetchall()]

    async def list_by_category(self, db: AsyncSession, category_id: int) -> list[Transaction]:
        result = await db.execute(_LIST_BY_CATEGORY_SQL, {"category_id": category_id})
        return [_row_to_transaction(row) for row in result.fetchall()]

    async def totals_by_type(self, db: AsyncSession, user_id: int) -> IncomeExpenseTotals:
        result = await db.execute(_TOTALS_BY_TYPE_SQL, {"user_id": user_id})
        totals = IncomeExpenseTotals()
        for row in result.fetchall():
            if row.type == EntryType.INCOME.value:
                totals.income_cents = int(row.total)
            elif row.type == EntryType.EXPENSE.value:
                totals.expense_cents = int(row.total)
        return totals
