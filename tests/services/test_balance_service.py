"""
Tests for the BalanceService.

Balance adjustments are a side effect of entry writes: they
must follow every create, delete, and transfer, and they must
never make the entry write itself fail.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from money_manager.models.entry import Entry
from money_manager.models.enums import AccountType, EntryKind
from money_manager.schemas.account import AccountCreate
from money_manager.schemas.entry import EntryCreate, TransferRequest
from money_manager.services.account_service import AccountService
from money_manager.services.balance_service import BalanceService
from money_manager.services.entry_service import EntryService

OWNER = "alice@example.com"


def open_account(db_session, name, balance="0", owner=OWNER):
    account = AccountService(db_session).create_account(AccountCreate(
        owner=owner,
        account_name=name,
        account_type=AccountType.SAVINGS,
        balance=Decimal(balance),
    ))
    db_session.commit()
    return account


def record(db_session, kind, amount, account="Cash"):
    entry = EntryService(db_session, kind).create(EntryCreate(
        owner=OWNER,
        source="Test",
        amount=Decimal(amount),
        payment_method="Cash",
        entry_date=date(2024, 3, 1),
        time="09:00",
        account=account,
    ))
    db_session.commit()
    return entry


def transfer(db_session, amount, from_account="Cash", to_account="HDFC"):
    entry = EntryService(db_session, EntryKind.EXPENSE).transfer(TransferRequest(
        owner=OWNER,
        from_account=from_account,
        to_account=to_account,
        amount=Decimal(amount),
        entry_date=date(2024, 3, 1),
    ))
    db_session.commit()
    return entry


def balance_of(db_session, account):
    db_session.refresh(account)
    return account.balance


class TestEntryBalances:

    def test_income_credits_account(self, db_session):
        cash = open_account(db_session, "Cash", "100")
        record(db_session, EntryKind.INCOME, "50")
        assert balance_of(db_session, cash) == Decimal("150")

    def test_expense_debits_account(self, db_session):
        cash = open_account(db_session, "Cash", "100")
        record(db_session, EntryKind.EXPENSE, "30")
        assert balance_of(db_session, cash) == Decimal("70")

    def test_balance_may_go_negative(self, db_session):
        cash = open_account(db_session, "Cash", "10")
        record(db_session, EntryKind.EXPENSE, "25")
        assert balance_of(db_session, cash) == Decimal("-15")

    def test_only_named_account_moves(self, db_session):
        cash = open_account(db_session, "Cash", "100")
        bank = open_account(db_session, "HDFC", "100")
        record(db_session, EntryKind.INCOME, "40", account="HDFC")

        assert balance_of(db_session, cash) == Decimal("100")
        assert balance_of(db_session, bank) == Decimal("140")

    def test_other_owners_account_is_untouched(self, db_session):
        theirs = open_account(db_session, "Cash", "100", owner="bob@example.com")
        record(db_session, EntryKind.INCOME, "40")
        assert balance_of(db_session, theirs) == Decimal("100")

    def test_missing_account_is_skipped(self, db_session, caplog):
        with caplog.at_level(logging.WARNING):
            entry = record(db_session, EntryKind.INCOME, "40", account="Nowhere")

        assert db_session.get(Entry, entry.id) is not None
        assert "not found" in caplog.text


class TestTransferBalances:

    def test_transfer_moves_both_sides(self, db_session):
        cash = open_account(db_session, "Cash", "500")
        bank = open_account(db_session, "HDFC", "0")

        transfer(db_session, "200")

        assert balance_of(db_session, cash) == Decimal("300")
        assert balance_of(db_session, bank) == Decimal("200")

    def test_transfer_to_missing_account_still_debits_source(self, db_session):
        cash = open_account(db_session, "Cash", "500")
        transfer(db_session, "200", to_account="Ghost")
        assert balance_of(db_session, cash) == Decimal("300")

    def test_deleting_transfer_reverses_both_sides(self, db_session):
        cash = open_account(db_session, "Cash", "500")
        bank = open_account(db_session, "HDFC", "0")
        entry = transfer(db_session, "200")

        EntryService(db_session, EntryKind.EXPENSE).delete(entry.id)
        db_session.commit()

        assert balance_of(db_session, cash) == Decimal("500")
        assert balance_of(db_session, bank) == Decimal("0")


class TestAdjustmentFailures:

    def test_failed_adjustment_keeps_entry(self, db_session, monkeypatch, caplog):
        cash = open_account(db_session, "Cash", "100")

        def broken_increment(self, owner, account_name, delta):
            raise OperationalError("UPDATE accounts", {}, Exception("database is locked"))

        monkeypatch.setattr(BalanceService, "_increment", broken_increment)

        with caplog.at_level(logging.ERROR):
            entry = record(db_session, EntryKind.INCOME, "50")

        assert db_session.get(Entry, entry.id) is not None
        assert balance_of(db_session, cash) == Decimal("100")
        assert "Could not adjust account balances" in caplog.text

    def test_apply_reports_failure(self, db_session, monkeypatch):
        def broken_increment(self, owner, account_name, delta):
            raise OperationalError("UPDATE accounts", {}, Exception("disk I/O error"))

        monkeypatch.setattr(BalanceService, "_increment", broken_increment)

        assert BalanceService(db_session).apply(OWNER, [("Cash", Decimal("1"))]) is False

    def test_unchanged_entry_writes_nothing(self, db_session):
        cash = open_account(db_session, "Cash", "100")
        entry = record(db_session, EntryKind.INCOME, "50")
        service = BalanceService(db_session)

        assert service.on_changed(entry, service.entry_deltas(entry)) is True
        db_session.commit()
        assert balance_of(db_session, cash) == Decimal("150")
