"""Global enums — must match DB CHECK constraints exactly (see migrations/)."""

from enum import Enum


class EntryType(str, Enum):
    """Shared by categories.type and transactions.type."""

    INCOME = "income"
    EXPENSE = "expense"


class ReportKind(str, Enum):
    """reports.report_name of stored reports."""

    SUMMARY = "summary"
