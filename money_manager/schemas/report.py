"""
Pydantic schemas for the reporting surfaces.

Transactions, period summaries, and the dashboard all build
on the same pieces: a typed transaction item, totals, and
period buckets.
"""

from datetime import date
from decimal import Decimal

from pydantic import Field

from money_manager.models.enums import EntryKind
from money_manager.schemas.base import CamelModel
from money_manager.schemas.entry import EntryResponse


class TransactionItem(EntryResponse):
    """An entry annotated for the merged income/expense feed."""
    kind: EntryKind = Field(alias="type")
    signed_amount: Decimal
    display_amount: str
    can_edit: bool


class DateRangeResponse(CamelModel):
    start: date
    end: date


class Totals(CamelModel):
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")


class Counts(CamelModel):
    income: int = 0
    expense: int = 0
    total: int = 0


class PeriodBucketResponse(CamelModel):
    period: str
    income: Decimal
    expense: Decimal
    balance: Decimal
    count: int
    transactions: list[TransactionItem]


class PeriodTotal(CamelModel):
    period: str
    income: Decimal
    expense: Decimal
    balance: Decimal


class CategorySummary(CamelModel):
    category: str
    income: Decimal
    expense: Decimal
    total: Decimal


class DivisionSummary(CamelModel):
    division: str
    income: Decimal
    expense: Decimal
    balance: Decimal


class Summaries(CamelModel):
    by_category: list[CategorySummary]
    by_division: list[DivisionSummary]


class FiltersApplied(CamelModel):
    start_date: date | None = None
    end_date: date | None = None
    division: str | None = None
    category: str | None = None
    account: str | None = None
    type: str | None = None
    period: str | None = None


class TransactionsReport(CamelModel):
    transactions: list[TransactionItem]
    totals: Totals
    counts: Counts
    period_data: list[PeriodBucketResponse] | None
    summaries: Summaries
    filters_applied: FiltersApplied


class SummaryTotals(CamelModel):
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal


class TransactionsSummary(CamelModel):
    period: str
    date_range: DateRangeResponse
    income_by_period: list[PeriodBucketResponse]
    expense_by_period: list[PeriodBucketResponse]
    period_totals: list[PeriodTotal]
    summary: SummaryTotals


class RecentTransactions(CamelModel):
    recent_transactions: list[TransactionItem]
    count: int


class RangeReport(CamelModel):
    date_range: DateRangeResponse
    transactions: list[TransactionItem]
    totals: Totals
    counts: Counts


class EntryPeriodReport(CamelModel):
    """Single-kind entries in the current period, bucketed."""
    period: str
    date_range: DateRangeResponse
    data: list[PeriodBucketResponse]
    total: Decimal


# --- Dashboard ---

class TrendPoint(CamelModel):
    period: str
    start: date
    end: date
    year: int
    month: int | None = None
    income: Decimal
    expense: Decimal
    balance: Decimal


class TrendReport(CamelModel):
    period: str
    data: list[TrendPoint]


class GroupTotal(CamelModel):
    """A grouped sum, e.g. all expenses in one category."""
    name: str | None
    total: Decimal
    count: int


class KindBreakdown(CamelModel):
    income: list[GroupTotal]
    expense: list[GroupTotal]


class DashboardSummary(CamelModel):
    total_income: Decimal
    total_expense: Decimal
    current_month_income: Decimal
    current_month_expense: Decimal
    balance: Decimal
    current_month_balance: Decimal


class LifetimeCounts(CamelModel):
    total_income: int
    total_expense: int


class DashboardReport(CamelModel):
    period: str
    date_range: DateRangeResponse
    summary: DashboardSummary
    categories: KindBreakdown
    divisions: KindBreakdown
    recent_transactions: list[TransactionItem]
    trends: list[TrendPoint]
    counts: LifetimeCounts
