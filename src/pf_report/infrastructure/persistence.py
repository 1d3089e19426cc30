"""ReportRepository — stored reports plus the aggregates reports are built from.

Amounts are summed in cents as BIGINT; COALESCE keeps empty sets at 0.
"""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_report.domain.models import StoredReport

_COLUMNS = "id, user_id, report_name, generated_at, data"

_LATEST_SQL = text(f"""
    SELECT {_COLUMNS} FROM reports
    WHERE user_id = :user_id AND report_name = :report_name
    ORDER BY generated_at DESC, id DESC
    LIMIT 1
""")

_INSERT_SQL = text(f"""
    INSERT INTO reports (user_id, report_name, data)
    VALUES (:user_id, :report_name, CAST(:data AS JSONB))
    RETURNING {_COLUMNS}
""")

_TOTAL_BALANCE_SQL = text("""
    SELECT COALESCE(SUM(balance_cents), 0) FROM accounts WHERE user_id = :user_id
""")

_EXPENSES_SINCE_SQL = text("""
    SELECT COALESCE(SUM(amount_cents), 0) FROM transactions
    WHERE user_id = :user_id AND type = 'expense' AND created_at >= :since
""")

# Reached target and not past its deadline; a goal without deadline never lapses.
_COMPLETED_GOALS_SQL = text("""
    SELECT COUNT(*) FROM financial_goals
    WHERE user_id = :user_id
      AND target_amount_cents <= saved_amount_cents
      AND (deadline IS NULL OR deadline >= CURRENT_DATE)
""")

# Half-open range [start, end)
_EXPENSES_BY_CATEGORY_SQL = text("""
    SELECT c.name AS category, COALESCE(SUM(t.amount_cents), 0) AS total
    FROM transactions t
    JOIN categories c ON c.id = t.category_id
    WHERE t.user_id = :user_id
      AND t.type = 'expense'
      AND t.created_at >= :start
      AND t.created_at < :end
    GROUP BY c.name
    ORDER BY c.name
""")


def _row_to_report(row: object) -> StoredReport:
    return StoredReport(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        report_name=row.report_name,  # type: ignore[attr-defined]
        generated_at=row.generated_at,  # type: ignore[attr-defined]
        data=row.data,  # type: ignore[attr-defined]
    )


class ReportRepository:
    async def latest(
        self, db: AsyncSession, user_id: int, report_name: str
    ) -> StoredReport | None:
        result = await db.execute(
            _LATEST_SQL, {"user_id": user_id, "report_name": report_name}
        )
        row = result.fetchone()
        return _row_to_report(row) if row else None

    async def insert(
        self, db: AsyncSession, user_id: int, report_name: str, data_json: str
    ) -> StoredReport:
        result = await db.execute(
            _INSERT_SQL,
            {"user_id": user_id, "report_name": report_name, "data": data_json},
        )
        return _row_to_report(result.fetchone())

    async def total_balance(self, db: AsyncSession, user_id: int) -> int:
        result = await db.execute(_TOTAL_BALANCE_SQL, {"user_id": user_id})
        return int(result.scalar() or 0)

    async def expenses_since(self, db: AsyncSession, user_id: int, since: datetime) -> int:
        result = await db.execute(_EXPENSES_SINCE_SQL, {"user_id": user_id, "since": since})
        return int(result.scalar() or 0)

    async def completed_goals(self, db: AsyncSession, user_id: int) -> int:
        result = await db.execute(_COMPLETED_GOALS_SQL, {"user_id": user_id})
        return int(result.scalar() or 0)

    async def expenses_by_category(
        self, db: AsyncSession, user_id: int, start: datetime, end: datetime
    ) -> dict[str, int]:
        result = await db.execute(
            _EXPENSES_BY_CATEGORY_SQL, {"user_id": user_id, "start": start, "end": end}
        )
        return {row.category: int(row.total) for row in result.fetchall()}
