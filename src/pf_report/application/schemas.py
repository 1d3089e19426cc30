"""Pydantic schemas for pf_report."""

from datetime import date, datetime

from pydantic import BaseModel

from src.pf_common.cents import cents_to_display
from src.pf_report.domain.models import (
    ExpensesByCategoryReportContent,
    SummaryReportContent,
)


class SummaryReportResponse(BaseModel):
    report_id: int
    generated_at: str
    total_balance_cents: int
    total_balance_display: str
    month_expenses_cents: int
    month_expenses_display: str
    completed_goals: int

    @classmethod
    def from_content(
        cls, report_id: int, generated_at: datetime, content: SummaryReportContent
    ) -> "SummaryReportResponse":
        return cls(
            report_id=report_id,
            generated_at=generated_at.isoformat(),
            total_balance_cents=content.total_balance_cents,
            total_balance_display=cents_to_display(content.total_balance_cents),
            month_expenses_cents=content.month_expenses_cents,
            month_expenses_display=cents_to_display(content.month_expenses_cents),
            completed_goals=content.completed_goals,
        )


class CategoryExpense(BaseModel):
    category: str
    total_cents: int
    total_display: str


class ExpensesByCategoryResponse(BaseModel):
    start_date: date
    end_date: date
    total_cents: int
    categories: list[CategoryExpense]

    @classmethod
    def from_content(
        cls, content: ExpensesByCategoryReportContent
    ) -> "ExpensesByCategoryResponse":
        return cls(
            start_date=content.start,
            end_date=content.end,
            total_cents=sum(content.totals.values()),
            categories=[
                CategoryExpense(
                    category=name,
                    total_cents=cents,
                    total_display=cents_to_display(cents),
                )
                for name, cents in content.totals.items()
            ],
        )
