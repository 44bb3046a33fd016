"""
Entry service: income and expense records.

One service handles both kinds. It is constructed with the
kind it works on, and every query is scoped by that kind and
by owner, so an income id can never be edited through the
expense endpoints and one owner never sees another's rows.

Mutations follow the same steps:
1. Load the entry (NotFoundError if it is not there)
2. Check the edit window (EditWindowExpiredError once it closed)
3. Write the change
4. Let BalanceService adjust the account balances

The caller controls the commit, so the entry write and its
balance adjustments land in the same database transaction.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Select, select, func
from sqlalchemy.orm import Session

from money_manager.errors import (
    EditWindowExpiredError,
    NotFoundError,
    ValidationError,
)
from money_manager.models.entry import Entry, DEFAULT_ACCOUNT
from money_manager.models.enums import Division, EntryKind
from money_manager.schemas.entry import EntryCreate, EntryUpdate, TransferRequest
from money_manager.services.balance_service import BalanceService

logger = logging.getLogger(__name__)

TRANSFER_CATEGORY = "Transfer"


@dataclass
class EntryFilters:
    """Optional filters, combined with AND. None means unconstrained."""
    start_date: date | None = None
    end_date: date | None = None
    division: Division | None = None
    category: str | None = None
    account: str | None = None


class EntryService:

    def __init__(self, db: Session, kind: EntryKind):
        self.db = db
        self.kind = kind
        self.balance_service = BalanceService(db)

    # --- Queries ---

    def _scoped(self, stmt: Select, owner: str, filters: EntryFilters | None) -> Select:
        """Restrict a statement to this kind, this owner, and the filters."""
        stmt = stmt.where(Entry.kind == self.kind, Entry.owner == owner)
        if filters is None:
            return stmt
        if filters.start_date is not None:
            stmt = stmt.where(Entry.entry_date >= filters.start_date)
        if filters.end_date is not None:
            stmt = stmt.where(Entry.entry_date <= filters.end_date)
        if filters.division is not None:
            stmt = stmt.where(Entry.division == filters.division)
        if filters.category is not None:
            stmt = stmt.where(Entry.category == filters.category)
        if filters.account is not None:
            stmt = stmt.where(Entry.account == filters.account)
        return stmt

    def find(
        self,
        owner: str,
        filters: EntryFilters | None = None,
        ascending: bool = False,
        limit: int | None = None,
    ) -> list[Entry]:
        """
        Return matching entries, newest first.

        Ordering is by date, then time, then id so that entries
        on the same day keep a stable order.
        """
        stmt = self._scoped(select(Entry), owner, filters)
        if ascending:
            stmt = stmt.order_by(Entry.entry_date.asc(), Entry.time.asc(), Entry.id.asc())
        else:
            stmt = stmt.order_by(Entry.entry_date.desc(), Entry.time.desc(), Entry.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def recent(self, owner: str, limit: int) -> list[Entry]:
        return self.find(owner, limit=limit)

    def find_by_category(self, owner: str, category: str | None = None) -> list[Entry]:
        return self.find(owner, EntryFilters(category=category))

    def sum_amount(self, owner: str, filters: EntryFilters | None = None) -> Decimal:
        """Total amount of matching entries, 0 when there are none."""
        stmt = self._scoped(
            select(func.coalesce(func.sum(Entry.amount), 0)), owner, filters
        )
        total = self.db.execute(stmt).scalar()
        return Decimal(str(total))

    def count_all(self, owner: str) -> int:
        stmt = self._scoped(select(func.count(Entry.id)), owner, None)
        return self.db.execute(stmt).scalar() or 0

    def summarize_by_category(
        self, owner: str, filters: EntryFilters | None = None
    ) -> list[dict]:
        """
        Category breakdown: total and count per category, largest first.

        The division reported for a category is the one of its
        entries that sorts first; categories spanning both
        divisions are not split.
        """
        stmt = self._scoped(
            select(
                Entry.category,
                func.min(Entry.division),
                func.coalesce(func.sum(Entry.amount), 0),
                func.count(Entry.id),
            ),
            owner,
            filters,
        ).group_by(Entry.category)

        rows = [
            {
                "category": category,
                "division": division,
                "total_amount": Decimal(str(total)),
                "count": count,
            }
            for category, division, total, count in self.db.execute(stmt).all()
        ]
        rows.sort(key=lambda r: r["total_amount"], reverse=True)
        return rows

    def group_totals(
        self,
        owner: str,
        field: str,
        filters: EntryFilters | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        """Sum and count grouped by "category" or "division", largest first."""
        column = {"category": Entry.category, "division": Entry.division}.get(field)
        if column is None:
            raise ValidationError(f"Cannot group entries by '{field}'")

        stmt = self._scoped(
            select(
                column,
                func.coalesce(func.sum(Entry.amount), 0),
                func.count(Entry.id),
            ),
            owner,
            filters,
        ).group_by(column)

        rows = []
        for key, total, count in self.db.execute(stmt).all():
            name = key.value if isinstance(key, Division) else key
            rows.append({"name": name, "total": Decimal(str(total)), "count": count})
        rows.sort(key=lambda r: r["total"], reverse=True)
        return rows[:limit] if limit is not None else rows

    def get(self, entry_id: int) -> Entry:
        entry = self.db.execute(
            select(Entry).where(Entry.id == entry_id, Entry.kind == self.kind)
        ).scalar_one_or_none()
        if not entry:
            raise NotFoundError(f"{self.kind.label} not found!")
        return entry

    # --- Mutations ---

    def insert(self, entry: Entry) -> Entry:
        """Persist an entry; identity and created_at are assigned on flush."""
        entry.kind = self.kind
        self.db.add(entry)
        self.db.flush()
        return entry

    def create(self, request: EntryCreate) -> Entry:
        """
        Record a new entry and apply its balance effect.

        Category falls back to the source, account to "Cash".
        """
        entry = self.insert(Entry(
            owner=request.owner,
            source=request.source,
            amount=request.amount,
            payment_method=request.payment_method,
            entry_date=request.entry_date,
            time=request.time,
            notes=request.notes,
            division=request.division,
            category=request.category or request.source,
            account=request.account or DEFAULT_ACCOUNT,
        ))
        logger.info(
            "%s %s recorded for %s: %s on '%s'",
            self.kind.label, entry.id, entry.owner, entry.amount, entry.account,
        )

        self.balance_service.on_created(entry)
        return entry

    def _get_editable(self, entry_id: int, action: str) -> Entry:
        entry = self.get(entry_id)
        if not entry.can_edit():
            raise EditWindowExpiredError(
                f"Cannot {action} {self.kind.value} after 12 hours of creation!"
            )
        return entry

    def update(self, entry_id: int, request: EntryUpdate) -> Entry:
        """
        Change the fields present in the request.

        If amount or account changed, the old balance effect is
        reversed and the new one applied.
        """
        entry = self._get_editable(entry_id, "edit")
        before = self.balance_service.entry_deltas(entry)

        for name, value in request.model_dump(exclude_unset=True).items():
            setattr(entry, name, value)
        self.db.flush()

        self.balance_service.on_changed(entry, before)
        logger.info("%s %s updated", self.kind.label, entry.id)
        return entry

    def delete(self, entry_id: int) -> Entry:
        """Remove an entry and reverse its balance effect."""
        entry = self._get_editable(entry_id, "delete")

        self.db.delete(entry)
        self.db.flush()

        self.balance_service.on_deleted(entry)
        logger.info("%s %s deleted", self.kind.label, entry_id)
        return entry

    def transfer(self, request: TransferRequest) -> Entry:
        """
        Move money between two of the owner's accounts.

        Recorded as a single expense on the source account,
        tagged as a transfer. Both balances move inside one
        savepoint, so either both change or neither does.
        """
        if self.kind != EntryKind.EXPENSE:
            raise ValidationError("Transfers are recorded as expenses")

        entry = self.insert(Entry(
            owner=request.owner,
            source=f"Transfer to {request.to_account}",
            amount=request.amount,
            payment_method="Transfer",
            entry_date=request.entry_date,
            time=request.time or datetime.now().strftime("%H:%M:%S"),
            notes=request.notes or f"Transfer to {request.to_account}",
            division=Division.PERSONAL,
            category=TRANSFER_CATEGORY,
            account=request.from_account,
            is_transfer=True,
            transfer_to=request.to_account,
        ))

        if self.balance_service.on_created(entry):
            logger.info(
                "Transfer completed: %s from '%s' to '%s'",
                request.amount, request.from_account, request.to_account,
            )
        return entry
