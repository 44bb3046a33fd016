"""
Dashboard service: the home screen in one response.

Lifetime and current-month totals, category and division
breakdowns for the selected period, the latest transactions,
and a trailing trend series. All reads go through the same
session, so the numbers come from one consistent view of the
data.

The reads run one after another rather than concurrently: a
Session is not safe to share across threads.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from money_manager.models.entry import Entry
from money_manager.models.enums import EntryKind
from money_manager.schemas.report import (
    DashboardReport,
    DashboardSummary,
    DateRangeResponse,
    GroupTotal,
    KindBreakdown,
    LifetimeCounts,
    TrendPoint,
    TrendReport,
)
from money_manager.services.entry_service import EntryFilters, EntryService
from money_manager.services.periods import (
    MONTHLY,
    PeriodWindow,
    get_date_range,
    trailing_windows,
)
from money_manager.services.report_service import merge_transactions

RECENT_LIMIT = 10
# Each kind contributes at most this many rows before the merge
RECENT_PER_KIND = 5
BREAKDOWN_LIMIT = 10
DASHBOARD_TREND_MONTHS = 6


def trend_points(
    windows: list[PeriodWindow], incomes: list[Entry], expenses: list[Entry]
) -> list[TrendPoint]:
    """
    Sum entries into each window.

    Every window produces a point, zero-filled when empty.
    """
    points = []
    for window in windows:
        income = sum(
            (e.amount for e in incomes if window.contains(e.entry_date)),
            Decimal("0"),
        )
        expense = sum(
            (e.amount for e in expenses if window.contains(e.entry_date)),
            Decimal("0"),
        )
        points.append(TrendPoint(
            period=window.period,
            start=window.start,
            end=window.end,
            year=window.year,
            month=window.month,
            income=income,
            expense=expense,
            balance=income - expense,
        ))
    return points


class DashboardService:

    def __init__(self, db: Session):
        self.db = db
        self.incomes = EntryService(db, EntryKind.INCOME)
        self.expenses = EntryService(db, EntryKind.EXPENSE)

    def trend(
        self,
        owner: str,
        granularity: str | None,
        count: int | None = None,
        today: date | None = None,
    ) -> list[TrendPoint]:
        """Trailing series of income/expense/balance per period."""
        windows = trailing_windows(granularity, count, today)
        if not windows:
            return []
        filters = EntryFilters(start_date=windows[0].start, end_date=windows[-1].end)
        return trend_points(
            windows,
            self.incomes.find(owner, filters, ascending=True),
            self.expenses.find(owner, filters, ascending=True),
        )

    def period_trend(
        self,
        owner: str,
        period: str = MONTHLY,
        months: int | None = None,
        today: date | None = None,
    ) -> TrendReport:
        """
        Trend for the period endpoint.

        `months` only applies to the monthly series; weekly and
        yearly use their fixed lengths.
        """
        count = months if period == MONTHLY else None
        return TrendReport(period=period, data=self.trend(owner, period, count, today))

    def _breakdown(
        self, owner: str, field: str, filters: EntryFilters, limit: int | None = None
    ) -> KindBreakdown:
        return KindBreakdown(
            income=[
                GroupTotal(**row)
                for row in self.incomes.group_totals(owner, field, filters, limit)
            ],
            expense=[
                GroupTotal(**row)
                for row in self.expenses.group_totals(owner, field, filters, limit)
            ],
        )

    def dashboard(self, owner: str, period: str = MONTHLY, today: date | None = None) -> DashboardReport:
        today = today or date.today()
        date_range = get_date_range(period, today)
        current_month = get_date_range(MONTHLY, today)

        period_filters = EntryFilters(start_date=date_range.start, end_date=date_range.end)
        month_filters = EntryFilters(
            start_date=current_month.start, end_date=current_month.end
        )

        total_income = self.incomes.sum_amount(owner)
        total_expense = self.expenses.sum_amount(owner)
        month_income = self.incomes.sum_amount(owner, month_filters)
        month_expense = self.expenses.sum_amount(owner, month_filters)

        recent = merge_transactions(
            self.incomes.recent(owner, RECENT_PER_KIND),
            self.expenses.recent(owner, RECENT_PER_KIND),
            limit=RECENT_LIMIT,
        )

        return DashboardReport(
            period=period,
            date_range=DateRangeResponse(start=date_range.start, end=date_range.end),
            summary=DashboardSummary(
                total_income=total_income,
                total_expense=total_expense,
                current_month_income=month_income,
                current_month_expense=month_expense,
                balance=total_income - total_expense,
                current_month_balance=month_income - month_expense,
            ),
            categories=self._breakdown(owner, "category", period_filters, BREAKDOWN_LIMIT),
            divisions=self._breakdown(owner, "division", period_filters),
            recent_transactions=recent,
            trends=self.trend(owner, MONTHLY, DASHBOARD_TREND_MONTHS, today),
            counts=LifetimeCounts(
                total_income=self.incomes.count_all(owner),
                total_expense=self.expenses.count_all(owner),
            ),
        )
