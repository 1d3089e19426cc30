"""ReportApplicationService — summary and expenses-by-category reports.

Summary is get-or-create: the latest stored "summary" row is returned as is;
with none stored (or refresh=True) it is built from the current aggregates and
stored. Expenses-by-category is computed live for an inclusive date range and
never stored.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.database import store_errors, unit_of_work
from src.pf_common.datetime_utils import month_start, utc_now
from src.pf_common.enums import ReportKind
from src.pf_common.errors import ReportDecodeError, ValidationFailedError
from src.pf_report.application.schemas import (
    ExpensesByCategoryResponse,
    SummaryReportResponse,
)
from src.pf_report.domain.models import (
    REPORT_CONTENT,
    ExpensesByCategoryReportContent,
    StoredReport,
    SummaryReportContent,
)
from src.pf_report.domain.repository import ReportRepositoryProtocol
from src.pf_report.infrastructure.persistence import ReportRepository

logger = logging.getLogger(__name__)


def _decode_summary(report: StoredReport) -> SummaryReportContent:
    try:
        if isinstance(report.data, str | bytes):
            content = REPORT_CONTENT.validate_json(report.data)
        else:
            content = REPORT_CONTENT.validate_python(report.data)
    except ValidationError as exc:
        logger.error("Stored report %s is malformed: %s", report.id, exc)
        raise ReportDecodeError(report.id) from exc
    if not isinstance(content, SummaryReportContent):
        logger.error("Stored report %s is not a summary (kind=%s)", report.id, content.kind)
        raise ReportDecodeError(report.id)
    return content


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class ReportApplicationService:
    def __init__(self, repo: ReportRepositoryProtocol | None = None) -> None:
        self._repo: ReportRepositoryProtocol = repo or ReportRepository()

    async def get_summary(
        self, db: AsyncSession, user_id: int, refresh: bool = False
    ) -> SummaryReportResponse:
        async with unit_of_work(db):
            if not refresh:
                stored = await self._repo.latest(db, user_id, ReportKind.SUMMARY.value)
                if stored is not None:
                    content = _decode_summary(stored)
                    return SummaryReportResponse.from_content(
                        stored.id, stored.generated_at, content
                    )

            content = SummaryReportContent(
                total_balance_cents=await self._repo.total_balance(db, user_id),
                month_expenses_cents=await self._repo.expenses_since(
                    db, user_id, month_start(utc_now())
                ),
                completed_goals=await self._repo.completed_goals(db, user_id),
            )
            stored = await self._repo.insert(
                db,
                user_id,
                ReportKind.SUMMARY.value,
                REPORT_CONTENT.dump_json(content).decode(),
            )
        logger.info("Summary report %s generated for user %s", stored.id, user_id)
        return SummaryReportResponse.from_content(stored.id, stored.generated_at, content)

    async def expenses_by_category(
        self, db: AsyncSession, user_id: int, start: date, end: date
    ) -> ExpensesByCategoryResponse:
        if start > end:
            raise ValidationFailedError(f"start_date {start} is after end_date {end}")
        with store_errors():
            totals = await self._repo.expenses_by_category(
                db, user_id, _day_start(start), _day_start(end + timedelta(days=1))
            )
        content = ExpensesByCategoryReportContent(start=start, end=end, totals=totals)
        return ExpensesByCategoryResponse.from_content(content)
