"""
Dashboard API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from money_manager.models.base import get_db
from money_manager.schemas.report import DashboardReport, TrendReport
from money_manager.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("/period/{owner}", response_model=TrendReport)
def get_period_trend(
    owner: str,
    period: str = Query("monthly"),
    months: int = Query(12, ge=1, le=120),
    db: Session = Depends(get_db),
):
    """
    Trailing trend series.

    Monthly covers the last `months` months, weekly the last
    8 weeks, yearly the last 5 years. Empty periods are
    included with zero totals.
    """
    return DashboardService(db).period_trend(owner, period, months)


@router.get("/{owner}", response_model=DashboardReport)
def get_dashboard(
    owner: str,
    period: str = Query("monthly"),
    db: Session = Depends(get_db),
):
    """Summary, breakdowns, recent transactions, and a 6-month trend."""
    return DashboardService(db).dashboard(owner, period)
