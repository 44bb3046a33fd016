"""
Report service: the merged income/expense transaction feed.

Incomes and expenses are stored as separate kinds; every
report here reads both, turns them into TransactionItems
(typed, signed, with an edit flag), and merges them into one
feed. Totals and summaries are always computed over the
full filtered set, never over a limited page.
"""

from datetime import date, datetime, time as dt_time
from decimal import Decimal
from typing import Iterable

from sqlalchemy.orm import Session

from money_manager.config import get_settings
from money_manager.errors import ValidationError
from money_manager.models.entry import Entry
from money_manager.models.enums import EntryKind
from money_manager.schemas.entry import EntryResponse
from money_manager.schemas.report import (
    CategorySummary,
    Counts,
    DateRangeResponse,
    DivisionSummary,
    FiltersApplied,
    PeriodBucketResponse,
    PeriodTotal,
    RangeReport,
    RecentTransactions,
    Summaries,
    SummaryTotals,
    Totals,
    TransactionItem,
    TransactionsReport,
    TransactionsSummary,
)
from money_manager.services.entry_service import EntryFilters, EntryService
from money_manager.services.periods import (
    PeriodBucket,
    get_date_range,
    group_by_period,
)

SORT_OPTIONS = ("date_asc", "date_desc", "amount_asc", "amount_desc")
DEFAULT_SORT = "date_desc"

TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M:%S %p", "%I:%M%p")

UNCATEGORIZED = "Uncategorized"
DEFAULT_DIVISION = "Personal"


# --- Feed building ---

def parse_time(value: str | None) -> dt_time:
    """Best-effort parse of the free-text time field; midnight if unreadable."""
    if value:
        text = value.strip().upper()
        for fmt in TIME_FORMATS:
            try:
                return datetime.strptime(text, fmt).time()
            except ValueError:
                continue
    return dt_time.min


def occurred_at(item) -> datetime:
    """Sortable timestamp combining the entry date and its time of day."""
    return datetime.combine(item.entry_date, parse_time(item.time))


def display_amount(kind: EntryKind, amount: Decimal, symbol: str) -> str:
    """Render "+₹100" / "-₹12.5"."""
    sign = "+" if kind == EntryKind.INCOME else "-"
    return f"{sign}{symbol}{amount.normalize():f}"


def to_transaction_item(entry: Entry, now: datetime | None = None) -> TransactionItem:
    symbol = get_settings().CURRENCY_SYMBOL
    data = EntryResponse.model_validate(entry).model_dump()
    data.update(
        signed_amount=entry.signed_amount,
        display_amount=display_amount(entry.kind, entry.amount, symbol),
        can_edit=entry.can_edit(now),
    )
    return TransactionItem(**data)


def sort_transactions(items: list[TransactionItem], sort_by: str | None) -> list[TransactionItem]:
    """
    Stable sort of the merged feed.

    Unknown sort keys fall back to newest first.
    """
    if sort_by == "date_asc":
        return sorted(items, key=occurred_at)
    if sort_by == "amount_asc":
        return sorted(items, key=lambda t: t.amount)
    if sort_by == "amount_desc":
        return sorted(items, key=lambda t: t.amount, reverse=True)
    return sorted(items, key=occurred_at, reverse=True)


def merge_transactions(
    incomes: Iterable[Entry],
    expenses: Iterable[Entry],
    sort_by: str | None = DEFAULT_SORT,
    limit: int | None = None,
    now: datetime | None = None,
) -> list[TransactionItem]:
    """Concatenate incomes and expenses, sort, then apply the limit."""
    items = [to_transaction_item(e, now) for e in incomes]
    items += [to_transaction_item(e, now) for e in expenses]
    items = sort_transactions(items, sort_by)
    if limit is not None:
        items = items[:limit]
    return items


# --- Aggregates ---

def _total(entries: Iterable) -> Decimal:
    return sum((e.amount for e in entries), Decimal("0"))


def compute_totals(incomes: list, expenses: list) -> Totals:
    income = _total(incomes)
    expense = _total(expenses)
    return Totals(income=income, expense=expense, balance=income - expense)


def category_summary(incomes: list, expenses: list) -> list[CategorySummary]:
    """
    Net amount per category across both kinds.

    Sorted by the size of the net amount, biggest swing first.
    Category nets always add up to the overall balance.
    """
    sums: dict[str, dict[str, Decimal]] = {}
    for kind, entries in ((EntryKind.INCOME, incomes), (EntryKind.EXPENSE, expenses)):
        for entry in entries:
            name = entry.category or UNCATEGORIZED
            row = sums.setdefault(name, {"income": Decimal("0"), "expense": Decimal("0")})
            row[kind.value] += entry.amount

    summary = [
        CategorySummary(
            category=name,
            income=row["income"],
            expense=row["expense"],
            total=row["income"] - row["expense"],
        )
        for name, row in sums.items()
    ]
    summary.sort(key=lambda s: abs(s.total), reverse=True)
    return summary


def division_summary(incomes: list, expenses: list) -> list[DivisionSummary]:
    sums: dict[str, dict[str, Decimal]] = {}
    for kind, entries in ((EntryKind.INCOME, incomes), (EntryKind.EXPENSE, expenses)):
        for entry in entries:
            division = entry.division.value if entry.division else DEFAULT_DIVISION
            row = sums.setdefault(division, {"income": Decimal("0"), "expense": Decimal("0")})
            row[kind.value] += entry.amount

    return [
        DivisionSummary(
            division=name,
            income=row["income"],
            expense=row["expense"],
            balance=row["income"] - row["expense"],
        )
        for name, row in sums.items()
    ]


def period_totals(
    income_buckets: list[PeriodBucket], expense_buckets: list[PeriodBucket]
) -> list[PeriodTotal]:
    """Line up separately bucketed income and expense series by label."""
    totals: dict[str, dict[str, Decimal]] = {}
    for bucket in income_buckets:
        row = totals.setdefault(bucket.period, {"income": Decimal("0"), "expense": Decimal("0")})
        row["income"] = bucket.income
    for bucket in expense_buckets:
        row = totals.setdefault(bucket.period, {"income": Decimal("0"), "expense": Decimal("0")})
        row["expense"] = bucket.expense

    return [
        PeriodTotal(
            period=period,
            income=row["income"],
            expense=row["expense"],
            balance=row["income"] - row["expense"],
        )
        for period, row in totals.items()
    ]


def bucket_responses(buckets: list[PeriodBucket]) -> list[PeriodBucketResponse]:
    return [PeriodBucketResponse.model_validate(b) for b in buckets]


class ReportService:

    def __init__(self, db: Session):
        self.db = db
        self.incomes = EntryService(db, EntryKind.INCOME)
        self.expenses = EntryService(db, EntryKind.EXPENSE)

    def _fetch(
        self, owner: str, filters: EntryFilters, entry_type: str | None = None
    ) -> tuple[list[Entry], list[Entry]]:
        """Load both kinds, honouring a type filter of income/expense/both."""
        if entry_type not in (None, "", "both", "income", "expense"):
            raise ValidationError(
                f"Invalid type '{entry_type}', expected income, expense or both"
            )
        incomes: list[Entry] = []
        expenses: list[Entry] = []
        if entry_type in (None, "", "both", "income"):
            incomes = self.incomes.find(owner, filters)
        if entry_type in (None, "", "both", "expense"):
            expenses = self.expenses.find(owner, filters)
        return incomes, expenses

    def transactions(
        self,
        owner: str,
        filters: EntryFilters,
        entry_type: str | None = None,
        period: str | None = None,
        sort_by: str | None = DEFAULT_SORT,
        limit: int | None = None,
    ) -> TransactionsReport:
        """
        Filtered, merged, sorted feed with totals and summaries.

        The period grouping is applied to the returned (limited)
        feed; totals and summaries cover everything that matched.
        """
        incomes, expenses = self._fetch(owner, filters, entry_type)
        feed = merge_transactions(incomes, expenses, sort_by, limit)

        period_data = None
        if period:
            period_data = bucket_responses(group_by_period(feed, period))

        return TransactionsReport(
            transactions=feed,
            totals=compute_totals(incomes, expenses),
            counts=Counts(
                income=len(incomes), expense=len(expenses), total=len(feed)
            ),
            period_data=period_data,
            summaries=Summaries(
                by_category=category_summary(incomes, expenses),
                by_division=division_summary(incomes, expenses),
            ),
            filters_applied=FiltersApplied(
                start_date=filters.start_date,
                end_date=filters.end_date,
                division=filters.division.value if filters.division else None,
                category=filters.category,
                account=filters.account,
                type=entry_type,
                period=period,
            ),
        )

    def summary(self, owner: str, period: str = "monthly", today: date | None = None) -> TransactionsSummary:
        """Income and expense bucketed over the current period."""
        date_range = get_date_range(period, today)
        filters = EntryFilters(start_date=date_range.start, end_date=date_range.end)
        incomes, expenses = self._fetch(owner, filters)

        income_buckets = group_by_period(merge_transactions(incomes, [], "date_asc"), period)
        expense_buckets = group_by_period(merge_transactions([], expenses, "date_asc"), period)
        totals = compute_totals(incomes, expenses)

        return TransactionsSummary(
            period=period,
            date_range=DateRangeResponse(start=date_range.start, end=date_range.end),
            income_by_period=bucket_responses(income_buckets),
            expense_by_period=bucket_responses(expense_buckets),
            period_totals=period_totals(income_buckets, expense_buckets),
            summary=SummaryTotals(
                total_income=totals.income,
                total_expense=totals.expense,
                balance=totals.balance,
            ),
        )

    def recent(self, owner: str, limit: int = 10) -> RecentTransactions:
        """The latest `limit` entries across both kinds."""
        feed = merge_transactions(
            self.incomes.recent(owner, limit),
            self.expenses.recent(owner, limit),
            DEFAULT_SORT,
            limit,
        )
        return RecentTransactions(recent_transactions=feed, count=len(feed))

    def date_range(self, owner: str, start: date, end: date) -> RangeReport:
        """Everything between two dates, oldest first."""
        if start > end:
            raise ValidationError("startDate must be on or before endDate")
        filters = EntryFilters(start_date=start, end_date=end)
        incomes, expenses = self._fetch(owner, filters)
        feed = merge_transactions(incomes, expenses, "date_asc")

        return RangeReport(
            date_range=DateRangeResponse(start=start, end=end),
            transactions=feed,
            totals=compute_totals(incomes, expenses),
            counts=Counts(
                income=len(incomes), expense=len(expenses), total=len(feed)
            ),
        )
