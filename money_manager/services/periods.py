"""
Period arithmetic for reports.

Three pieces, none of which touch the database:

- get_date_range: turns "weekly" / "monthly" / "yearly" into a
  concrete [start, end] date range around today.
- group_by_period: folds dated entries into labelled buckets
  (only periods that actually have entries show up).
- trailing_windows: the N most recent periods, ending with the
  current one, whether or not anything happened in them. Trend
  charts need the empty periods too.

Weekly bucket labels number weeks *within the month*
(ceil(day / 7)), so "2024-W03" is the 15th-21st of some month
and the counter restarts every month. This is not ISO week
numbering. Clients already depend on these labels, so it is
kept as is.
"""

import calendar
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable

from money_manager.models.enums import EntryKind

WEEKLY = "weekly"
MONTHLY = "monthly"
YEARLY = "yearly"

# Number of trailing periods when the caller doesn't ask for a count
DEFAULT_TREND_LENGTHS = {MONTHLY: 12, WEEKLY: 8, YEARLY: 5}


@dataclass(frozen=True)
class DateRange:
    """Inclusive on both ends."""
    start: date
    end: date

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def get_date_range(period: str | None, today: date | None = None) -> DateRange:
    """
    Resolve a period keyword to a date range around today.

    weekly  -> the last 7 days up to and including today
    monthly -> the current calendar month
    yearly  -> the current calendar year

    Anything else falls back to monthly; this never raises.
    """
    today = today or date.today()

    if period == WEEKLY:
        return DateRange(today - timedelta(days=7), today)
    if period == YEARLY:
        return DateRange(date(today.year, 1, 1), date(today.year, 12, 31))
    return DateRange(
        date(today.year, today.month, 1),
        _month_end(today.year, today.month),
    )


def week_of_month(d: date) -> int:
    return math.ceil(d.day / 7)


def period_key(d: date, granularity: str | None) -> str:
    """Label of the bucket a date falls into."""
    if granularity == MONTHLY:
        return f"{d.year}-{d.month:02d}"
    if granularity == WEEKLY:
        return f"{d.year}-W{week_of_month(d):02d}"
    if granularity == YEARLY:
        return f"{d.year}"
    return d.isoformat()


@dataclass
class PeriodBucket:
    period: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    transactions: list = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.transactions)

    def add(self, item) -> None:
        if item.kind == EntryKind.INCOME:
            self.income += item.amount
        else:
            self.expense += item.amount
        self.balance = self.income - self.expense
        self.transactions.append(item)


def group_by_period(items: Iterable, granularity: str | None) -> list[PeriodBucket]:
    """
    Group items into period buckets, sorted by label.

    Items only need kind, entry_date, and amount attributes,
    so both Entry rows and TransactionItem schemas work. The
    item order inside a bucket follows the input order.
    """
    buckets: dict[str, PeriodBucket] = {}
    for item in items:
        key = period_key(item.entry_date, granularity)
        if key not in buckets:
            buckets[key] = PeriodBucket(period=key)
        buckets[key].add(item)

    return [buckets[key] for key in sorted(buckets)]


@dataclass(frozen=True)
class PeriodWindow:
    """One slot of a trend series."""
    period: str
    start: date
    end: date
    year: int
    month: int | None = None

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


def _monthly_windows(count: int, today: date) -> list[PeriodWindow]:
    windows = []
    current = today.year * 12 + (today.month - 1)
    for offset in range(count - 1, -1, -1):
        year, month0 = divmod(current - offset, 12)
        month = month0 + 1
        windows.append(PeriodWindow(
            period=f"{calendar.month_abbr[month]} {year}",
            start=date(year, month, 1),
            end=_month_end(year, month),
            year=year,
            month=month,
        ))
    return windows


def _weekly_windows(count: int, today: date) -> list[PeriodWindow]:
    windows = []
    for offset in range(count - 1, -1, -1):
        start = today - timedelta(days=offset * 7)
        windows.append(PeriodWindow(
            period=f"Week {week_of_month(start)}",
            start=start,
            end=start + timedelta(days=6),
            year=start.year,
        ))
    return windows


def _yearly_windows(count: int, today: date) -> list[PeriodWindow]:
    return [
        PeriodWindow(
            period=str(year),
            start=date(year, 1, 1),
            end=date(year, 12, 31),
            year=year,
        )
        for year in range(today.year - count + 1, today.year + 1)
    ]


def trailing_windows(
    granularity: str | None,
    count: int | None = None,
    today: date | None = None,
) -> list[PeriodWindow]:
    """
    Return `count` consecutive periods ending with the current one,
    oldest first.

    Monthly windows are calendar months labelled "Mar 2024". Weekly
    windows are 7-day spans stepping back from today, labelled by
    week of month. Yearly windows are calendar years. Unknown
    granularities are treated as monthly.
    """
    today = today or date.today()
    if granularity not in DEFAULT_TREND_LENGTHS:
        granularity = MONTHLY
    if count is None:
        count = DEFAULT_TREND_LENGTHS[granularity]
    if count < 1:
        return []

    if granularity == WEEKLY:
        return _weekly_windows(count, today)
    if granularity == YEARLY:
        return _yearly_windows(count, today)
    return _monthly_windows(count, today)
