"""
Query-string filters shared by the listing endpoints.
"""

from datetime import date

from fastapi import Query

from money_manager.models.enums import Division
from money_manager.services.entry_service import EntryFilters


def entry_filters(
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    division: Division | None = Query(None),
    category: str | None = Query(None),
    account: str | None = Query(None),
) -> EntryFilters:
    """Build EntryFilters from ?startDate&endDate&division&category&account."""
    return EntryFilters(
        start_date=start_date,
        end_date=end_date,
        division=division,
        category=category or None,
        account=account or None,
    )
