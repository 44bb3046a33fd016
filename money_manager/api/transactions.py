"""
Transaction feed API endpoints.

Read-only views that merge incomes and expenses into one
list of transactions.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from money_manager.api.filters import entry_filters
from money_manager.errors import MoneyManagerError
from money_manager.models.base import get_db
from money_manager.schemas.report import (
    RangeReport,
    RecentTransactions,
    TransactionsReport,
    TransactionsSummary,
)
from money_manager.services.entry_service import EntryFilters
from money_manager.services.report_service import DEFAULT_SORT, ReportService

router = APIRouter(prefix="/api/transactions", tags=["Transactions"])


@router.get("/summary/{owner}", response_model=TransactionsSummary)
def get_summary(
    owner: str,
    period: str = Query("monthly"),
    db: Session = Depends(get_db),
):
    """Income and expense bucketed over the current week/month/year."""
    return ReportService(db).summary(owner, period)


@router.get("/recent/{owner}", response_model=RecentTransactions)
def get_recent(
    owner: str,
    limit: int = Query(10, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Latest transactions across incomes and expenses."""
    return ReportService(db).recent(owner, limit)


@router.get("/range/{owner}", response_model=RangeReport)
def get_range(
    owner: str,
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """All transactions between two dates (inclusive), oldest first."""
    if start_date is None or end_date is None:
        raise HTTPException(
            status_code=400, detail="startDate and endDate are required!"
        )
    try:
        return ReportService(db).date_range(owner, start_date, end_date)
    except MoneyManagerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{owner}", response_model=TransactionsReport)
def get_transactions(
    owner: str,
    type: str | None = Query(None),
    period: str | None = Query(None),
    limit: int | None = Query(None, ge=1),
    sort_by: str = Query(DEFAULT_SORT, alias="sortBy"),
    filters: EntryFilters = Depends(entry_filters),
    db: Session = Depends(get_db),
):
    """
    All of an owner's transactions with filters.

    ?type=income|expense|both picks which kinds to include,
    ?sortBy=date_asc|date_desc|amount_asc|amount_desc orders
    the feed, ?limit trims it after sorting, and ?period adds
    period buckets. Totals and summaries ignore the limit.
    """
    try:
        return ReportService(db).transactions(
            owner,
            filters,
            entry_type=type,
            period=period,
            sort_by=sort_by,
            limit=limit,
        )
    except MoneyManagerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
