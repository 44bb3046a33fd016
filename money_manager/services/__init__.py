"""Business logic services."""

from money_manager.services.balance_service import BalanceService
from money_manager.services.entry_service import EntryService, EntryFilters
from money_manager.services.account_service import AccountService
from money_manager.services.report_service import ReportService
from money_manager.services.dashboard_service import DashboardService

__all__ = [
    "BalanceService",
    "EntryService",
    "EntryFilters",
    "AccountService",
    "ReportService",
    "DashboardService",
]
