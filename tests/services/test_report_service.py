"""
Tests for the merged transaction feed and its aggregates.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from money_manager.errors import ValidationError
from money_manager.models.enums import Division, EntryKind
from money_manager.schemas.entry import EntryCreate
from money_manager.services.entry_service import EntryFilters, EntryService
from money_manager.services.report_service import (
    ReportService,
    display_amount,
    merge_transactions,
    parse_time,
)

OWNER = "alice@example.com"


def add(db_session, kind, amount, entry_date=date(2024, 3, 10), time="10:00", **extra):
    entry = EntryService(db_session, kind).create(EntryCreate(
        owner=OWNER,
        source=extra.pop("source", "Test"),
        amount=Decimal(amount),
        payment_method="Cash",
        entry_date=entry_date,
        time=time,
        **extra,
    ))
    db_session.commit()
    return entry


# --- Feed helpers ---

class TestFeedHelpers:

    def test_parse_time_formats(self):
        assert parse_time("14:30").hour == 14
        assert parse_time("2:05 pm").hour == 14
        assert parse_time("09:15:30").second == 30

    def test_parse_time_unreadable_is_midnight(self):
        assert parse_time("lunch").hour == 0
        assert parse_time(None).minute == 0

    def test_display_amount(self):
        assert display_amount(EntryKind.INCOME, Decimal("100.0000"), "₹") == "+₹100"
        assert display_amount(EntryKind.EXPENSE, Decimal("12.5000"), "$") == "-$12.5"


class TestMerge:

    def test_items_are_typed_and_signed(self, db_session):
        income = add(db_session, EntryKind.INCOME, "100")
        expense = add(db_session, EntryKind.EXPENSE, "40")

        feed = merge_transactions([income], [expense])
        by_kind = {item.kind: item for item in feed}

        assert by_kind[EntryKind.INCOME].signed_amount == Decimal("100")
        assert by_kind[EntryKind.EXPENSE].signed_amount == Decimal("-40")
        assert by_kind[EntryKind.EXPENSE].display_amount.startswith("-")

    def test_date_desc_uses_time_of_day(self, db_session):
        morning = add(db_session, EntryKind.INCOME, "1", time="08:00")
        evening = add(db_session, EntryKind.EXPENSE, "2", time="20:00")
        older = add(db_session, EntryKind.INCOME, "3", entry_date=date(2024, 3, 9), time="23:00")

        feed = merge_transactions([morning, older], [evening], "date_desc")
        assert [item.id for item in feed] == [evening.id, morning.id, older.id]

    def test_amount_desc(self, db_session):
        a = add(db_session, EntryKind.INCOME, "50")
        b = add(db_session, EntryKind.EXPENSE, "100")
        c = add(db_session, EntryKind.INCOME, "75")

        feed = merge_transactions([a, c], [b], "amount_desc")
        assert [item.amount for item in feed] == [Decimal("100"), Decimal("75"), Decimal("50")]

    def test_limit_applies_after_sort(self, db_session):
        small = add(db_session, EntryKind.INCOME, "5")
        big = add(db_session, EntryKind.EXPENSE, "500")

        feed = merge_transactions([small], [big], "amount_desc", limit=1)
        assert [item.id for item in feed] == [big.id]

    def test_unknown_sort_falls_back_to_newest_first(self, db_session):
        old = add(db_session, EntryKind.INCOME, "1", entry_date=date(2024, 1, 1))
        new = add(db_session, EntryKind.INCOME, "1", entry_date=date(2024, 6, 1))

        feed = merge_transactions([old, new], [], "by_mood")
        assert [item.id for item in feed] == [new.id, old.id]

    def test_can_edit_reflects_edit_window(self, db_session):
        entry = add(db_session, EntryKind.INCOME, "1")
        later = datetime.utcnow() + timedelta(hours=13)

        assert merge_transactions([entry], [])[0].can_edit is True
        assert merge_transactions([entry], [], now=later)[0].can_edit is False


# --- ReportService ---

class TestTransactionsReport:

    def test_totals_ignore_limit(self, db_session):
        add(db_session, EntryKind.INCOME, "100")
        add(db_session, EntryKind.INCOME, "50")
        add(db_session, EntryKind.EXPENSE, "30")

        report = ReportService(db_session).transactions(OWNER, EntryFilters(), limit=1)

        assert len(report.transactions) == 1
        assert report.totals.income == Decimal("150")
        assert report.totals.expense == Decimal("30")
        assert report.totals.balance == Decimal("120")
        assert report.counts.income == 2
        assert report.counts.expense == 1
        assert report.counts.total == 1

    def test_type_filter(self, db_session):
        add(db_session, EntryKind.INCOME, "100")
        add(db_session, EntryKind.EXPENSE, "30")

        report = ReportService(db_session).transactions(
            OWNER, EntryFilters(), entry_type="expense"
        )
        assert [item.kind for item in report.transactions] == [EntryKind.EXPENSE]
        assert report.totals.income == Decimal("0")

    def test_invalid_type_rejected(self, db_session):
        with pytest.raises(ValidationError):
            ReportService(db_session).transactions(OWNER, EntryFilters(), entry_type="loan")

    def test_category_nets_add_up_to_balance(self, db_session):
        add(db_session, EntryKind.INCOME, "100", category="Freelance")
        add(db_session, EntryKind.EXPENSE, "20", category="Freelance")
        add(db_session, EntryKind.EXPENSE, "50", category="Rent")

        report = ReportService(db_session).transactions(OWNER, EntryFilters())
        by_category = report.summaries.by_category

        assert [s.category for s in by_category] == ["Freelance", "Rent"]
        assert by_category[0].total == Decimal("80")
        assert by_category[1].total == Decimal("-50")
        assert sum(s.total for s in by_category) == report.totals.balance

    def test_division_summary(self, db_session):
        add(db_session, EntryKind.INCOME, "100", division=Division.OFFICE)
        add(db_session, EntryKind.EXPENSE, "40", division=Division.OFFICE)
        add(db_session, EntryKind.EXPENSE, "10")

        report = ReportService(db_session).transactions(OWNER, EntryFilters())
        divisions = {d.division: d for d in report.summaries.by_division}

        assert divisions["Office"].balance == Decimal("60")
        assert divisions["Personal"].expense == Decimal("10")

    def test_period_data_groups_the_feed(self, db_session):
        add(db_session, EntryKind.INCOME, "100", entry_date=date(2024, 1, 15))
        add(db_session, EntryKind.EXPENSE, "40", entry_date=date(2024, 2, 2))

        report = ReportService(db_session).transactions(
            OWNER, EntryFilters(), period="monthly"
        )
        assert [b.period for b in report.period_data] == ["2024-01", "2024-02"]
        assert report.period_data[1].balance == Decimal("-40")

    def test_filters_are_echoed(self, db_session):
        filters = EntryFilters(start_date=date(2024, 1, 1), division=Division.OFFICE)
        report = ReportService(db_session).transactions(OWNER, filters, entry_type="both")

        assert report.filters_applied.start_date == date(2024, 1, 1)
        assert report.filters_applied.division == "Office"
        assert report.filters_applied.type == "both"


class TestSummaryAndRange:

    def test_summary_lines_up_income_and_expense(self, db_session):
        today = date(2024, 3, 20)
        add(db_session, EntryKind.INCOME, "100", entry_date=date(2024, 3, 3))
        add(db_session, EntryKind.EXPENSE, "40", entry_date=date(2024, 3, 17))
        add(db_session, EntryKind.EXPENSE, "999", entry_date=date(2024, 2, 17))

        summary = ReportService(db_session).summary(OWNER, "monthly", today=today)

        assert summary.date_range.start == date(2024, 3, 1)
        assert summary.summary.total_expense == Decimal("40")
        assert summary.summary.balance == Decimal("60")
        (total,) = summary.period_totals
        assert total.period == "2024-03"
        assert total.income == Decimal("100")
        assert total.expense == Decimal("40")

    def test_recent_merges_both_kinds(self, db_session):
        for day in range(1, 5):
            add(db_session, EntryKind.INCOME, "1", entry_date=date(2024, 3, day))
            add(db_session, EntryKind.EXPENSE, "1", entry_date=date(2024, 3, day))

        recent = ReportService(db_session).recent(OWNER, limit=3)

        assert recent.count == 3
        assert recent.recent_transactions[0].entry_date == date(2024, 3, 4)

    def test_range_is_oldest_first(self, db_session):
        add(db_session, EntryKind.INCOME, "1", entry_date=date(2024, 3, 5))
        add(db_session, EntryKind.EXPENSE, "1", entry_date=date(2024, 3, 1))
        add(db_session, EntryKind.EXPENSE, "1", entry_date=date(2024, 4, 1))

        report = ReportService(db_session).date_range(
            OWNER, date(2024, 3, 1), date(2024, 3, 31)
        )
        assert [t.entry_date for t in report.transactions] == [
            date(2024, 3, 1), date(2024, 3, 5)
        ]
        assert report.counts.total == 2

    def test_inverted_range_rejected(self, db_session):
        with pytest.raises(ValidationError):
            ReportService(db_session).date_range(OWNER, date(2024, 4, 1), date(2024, 3, 1))
