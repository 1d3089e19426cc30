"""Repository Protocol — dependency inversion for testability."""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_report.domain.models import StoredReport


class ReportRepositoryProtocol(Protocol):
    # --- stored reports ---
    async def latest(
        self, db: AsyncSession, user_id: int, report_name: str
    ) -> StoredReport | None: ...

    async def insert(
        self, db: AsyncSession, user_id: int, report_name: str, data_json: str
    ) -> StoredReport: ...

    # --- aggregates ---
    async def total_balance(self, db: AsyncSession, user_id: int) -> int: ...

    async def expenses_since(self, db: AsyncSession, user_id: int, since: datetime) -> int: ...

    async def completed_goals(self, db: AsyncSession, user_id: int) -> int: ...

    async def expenses_by_category(
        self, db: AsyncSession, user_id: int, start: datetime, end: datetime
    ) -> dict[str, int]: ...
