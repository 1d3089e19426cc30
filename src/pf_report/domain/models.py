"""Domain models for pf_report.

StoredReport is a row of the reports table; its `data` column is decoded into
one of the ReportContent variants, selected by the `kind` field. A row whose
data matches no variant is malformed (ReportDecodeError), never coerced.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter


@dataclass
class StoredReport:
    id: int
    user_id: int
    report_name: str
    generated_at: datetime
    data: object  # raw JSONB value: str from asyncpg, dict/list if decoded upstream


class SummaryReportContent(BaseModel):
    kind: Literal["summary"] = "summary"
    total_balance_cents: int
    month_expenses_cents: int
    completed_goals: int


class ExpensesByCategoryReportContent(BaseModel):
    kind: Literal["expenses_by_category"] = "expenses_by_category"
    start: date
    end: date
    totals: dict[str, int]  # category name -> expense cents


ReportContent = Annotated[
    SummaryReportContent | ExpensesByCategoryReportContent,
    Field(discriminator="kind"),
]

REPORT_CONTENT: TypeAdapter[ReportContent] = TypeAdapter(ReportContent)
