"""
Income and expense API endpoints.

Both kinds expose the same endpoints with the same behaviour,
so the routes are built once by create_entry_router and
mounted twice. The layer stays thin: HTTP status codes and
commits here, business rules in EntryService.
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from money_manager.api.filters import entry_filters
from money_manager.errors import MoneyManagerError
from money_manager.models.base import get_db
from money_manager.models.enums import EntryKind
from money_manager.schemas.entry import (
    EntryCreate,
    EntryMessage,
    EntryResponse,
    EntrySummaryResponse,
    EntryTotal,
    EntryUpdate,
)
from money_manager.schemas.report import (
    DateRangeResponse,
    EntryPeriodReport,
    PeriodBucketResponse,
)
from money_manager.services.entry_service import EntryFilters, EntryService
from money_manager.services.periods import get_date_range, group_by_period
from money_manager.services.report_service import bucket_responses, to_transaction_item


def create_entry_router(kind: EntryKind, create_path: str) -> APIRouter:
    """
    Build the router for one entry kind.

    create_path differs per kind ("/add" for income, "/minus"
    for expense); every other path is shared.
    """
    router = APIRouter(prefix=f"/api/{kind.value}", tags=[kind.label])
    label = kind.label

    @router.post(create_path, response_model=EntryMessage, status_code=201)
    def create_entry(
        request: EntryCreate,
        db: Session = Depends(get_db),
    ):
        """
        Record a new entry.

        Category defaults to the source and account to "Cash".
        The account balance is adjusted as a side effect; if that
        fails the entry is still saved.
        """
        service = EntryService(db, kind)
        try:
            entry = service.create(request)
            response = EntryResponse.model_validate(entry)
            db.commit()
        except MoneyManagerError as e:
            db.rollback()
            raise HTTPException(status_code=e.status_code, detail=str(e))
        return EntryMessage(message=f"{label} added successfully!", entry=response)

    @router.get(
        "/total/{owner}",
        response_model=EntryTotal,
    )
    def get_total(
        owner: str,
        filters: EntryFilters = Depends(entry_filters),
        db: Session = Depends(get_db),
    ):
        """Sum of matching entries."""
        service = EntryService(db, kind)
        return EntryTotal(kind=kind, total=service.sum_amount(owner, filters))

    @router.get(
        "/summary/{owner}",
        response_model=EntrySummaryResponse,
    )
    def get_category_summary(
        owner: str,
        filters: EntryFilters = Depends(entry_filters),
        db: Session = Depends(get_db),
    ):
        """Totals and counts per category, largest first."""
        service = EntryService(db, kind)
        return EntrySummaryResponse(summary=service.summarize_by_category(owner, filters))

    @router.get(
        "/period/{owner}",
        response_model=EntryPeriodReport,
    )
    def get_by_period(
        owner: str,
        period: str = Query("monthly"),
        db: Session = Depends(get_db),
    ):
        """Entries in the current week/month/year, bucketed by period."""
        service = EntryService(db, kind)
        date_range = get_date_range(period)
        entries = service.find(
            owner,
            EntryFilters(start_date=date_range.start, end_date=date_range.end),
            ascending=True,
        )
        buckets = group_by_period(
            [to_transaction_item(e) for e in entries], period
        )
        if kind == EntryKind.INCOME:
            total = sum((b.income for b in buckets), Decimal("0"))
        else:
            total = sum((b.expense for b in buckets), Decimal("0"))

        return EntryPeriodReport(
            period=period,
            date_range=DateRangeResponse(start=date_range.start, end=date_range.end),
            data=bucket_responses(buckets),
            total=total,
        )

    @router.get(
        "/by-category/{owner}",
        response_model=list[EntryResponse],
    )
    def get_by_category(
        owner: str,
        category: str | None = Query(None),
        db: Session = Depends(get_db),
    ):
        """Entries in one category, or all entries when none is given."""
        service = EntryService(db, kind)
        return service.find_by_category(owner, category or None)

    @router.get(
        "/{owner}",
        response_model=list[EntryResponse] | list[PeriodBucketResponse],
    )
    def list_entries(
        owner: str,
        period: str | None = Query(None),
        filters: EntryFilters = Depends(entry_filters),
        db: Session = Depends(get_db),
    ):
        """
        List an owner's entries, newest first.

        With ?period=weekly|monthly|yearly the entries are
        returned grouped into period buckets instead.
        """
        service = EntryService(db, kind)
        entries = service.find(owner, filters)
        if period:
            return bucket_responses(
                group_by_period([to_transaction_item(e) for e in entries], period)
            )
        return [EntryResponse.model_validate(e) for e in entries]

    @router.put("/{entry_id}", response_model=EntryMessage)
    def update_entry(
        entry_id: int,
        request: EntryUpdate,
        db: Session = Depends(get_db),
    ):
        """
        Edit an entry.

        Only allowed within 12 hours of creation; after that
        the entry is locked (403).
        """
        service = EntryService(db, kind)
        try:
            entry = service.update(entry_id, request)
            response = EntryResponse.model_validate(entry)
            db.commit()
        except MoneyManagerError as e:
            db.rollback()
            raise HTTPException(status_code=e.status_code, detail=str(e))
        return EntryMessage(message=f"{label} updated successfully!", entry=response)

    @router.delete("/{entry_id}", response_model=EntryMessage)
    def delete_entry(
        entry_id: int,
        db: Session = Depends(get_db),
    ):
        """Delete an entry within its edit window and revert its balance effect."""
        service = EntryService(db, kind)
        try:
            entry = service.delete(entry_id)
            response = EntryResponse.model_validate(entry)
            db.commit()
        except MoneyManagerError as e:
            db.rollback()
            raise HTTPException(status_code=e.status_code, detail=str(e))
        return EntryMessage(message=f"{label} deleted successfully!", entry=response)

    return router
